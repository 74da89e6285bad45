"""Settings for the Crew Board.

The script endpoint is read from st.secrets["scheduler"]["url"] (and an
optional "timeout" in seconds). Outside a Streamlit deployment with a secrets
file, the SCHEDULER_API_URL / SCHEDULER_API_TIMEOUT environment variables are
used. Without a timeout setting, requests to the script wait indefinitely.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

import streamlit as st

DEFAULT_TIMEOUT: Optional[float] = None
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    scheduler_url: str = ""
    timeout: Optional[float] = DEFAULT_TIMEOUT


def _secrets_section() -> dict:
    try:
        return dict(st.secrets.get("scheduler", {}))
    except FileNotFoundError:
        return {}


def load_settings() -> Settings:
    section = _secrets_section()
    url = section.get("url") or os.environ.get("SCHEDULER_API_URL", "")
    timeout = section.get("timeout") or os.environ.get("SCHEDULER_API_TIMEOUT")
    return Settings(
        scheduler_url=str(url).strip(),
        timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
    )


def setup_logging():
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
    )
