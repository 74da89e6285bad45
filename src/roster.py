"""Fixed rosters of people, trucks and equipment known to the crew board.

These are reference data: tuples of frozen dataclasses built once at import.
Filtered views are derived from them, never written back.
"""
from src.models import Equipment, Person, Vehicle

PEOPLE: tuple[Person, ...] = (
    # Managers
    Person("Mark", "manager"),
    Person("Travis", "manager"),
    Person("Dana", "manager"),
    # Crew leaders
    Person("Jacob", "crew-leader"),
    Person("Luis", "crew-leader"),
    Person("Brandon", "crew-leader"),
    Person("Miguel", "crew-leader"),
    Person("Kyle", "crew-leader"),
    Person("Oscar", "crew-leader"),
    Person("Tyler", "crew-leader"),
    Person("Ramon", "crew-leader"),
    # Members
    Person("Adrian"),
    Person("Alex"),
    Person("Carlos"),
    Person("Chris"),
    Person("Cody"),
    Person("Diego"),
    Person("Eli"),
    Person("Evan"),
    Person("Hector"),
    Person("Isaac"),
    Person("Javier"),
    Person("Jose"),
    Person("Juan"),
    Person("Logan"),
    Person("Manny"),
    Person("Nate"),
    Person("Pedro"),
    Person("Ryan"),
    Person("Sam"),
)

TRUCKS: tuple[Vehicle, ...] = (
    Vehicle("301 Big Metal"),
    Vehicle("302 White Dodge"),
    Vehicle("303 Black Ford"),
    Vehicle("304 Dump Truck"),
    Vehicle("305 Silverado"),
    Vehicle("306 F-350"),
    Vehicle("307 Ram 2500"),
    Vehicle("308 Box Truck"),
    Vehicle("309 Flatbed"),
    Vehicle("310 Water Truck"),
)

EQUIPMENT: tuple[Equipment, ...] = (
    Equipment("16' Trailer", "trailer"),
    Equipment("20' Trailer", "trailer"),
    Equipment("Dump Trailer", "trailer"),
    Equipment("Enclosed Trailer", "trailer"),
    Equipment("Skid Steer", "machine"),
    Equipment("Mini Excavator", "machine"),
    Equipment("Compact Tractor", "machine"),
    Equipment("Stump Grinder", "machine"),
    Equipment("Sod Cutter", "machine"),
    Equipment("Aerator", "machine"),
    Equipment("Wood Chipper", "machine"),
)


def roster_tags(people=PEOPLE, trucks=TRUCKS, equipment=EQUIPMENT) -> dict:
    """Full rosters in the shape the sheet script keeps for reference."""
    return {
        "people": [{"name": p.name, "role": p.role} for p in people],
        "trucks": [t.name for t in trucks],
        "equipment": [{"name": e.name, "kind": e.kind} for e in equipment],
    }
