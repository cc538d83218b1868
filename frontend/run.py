#!/usr/bin/env python3
"""
Run script for the public Streamlit site.
"""

import streamlit.web.cli as stcli
import sys
import os

from config import PRIMARY_COLOR

if __name__ == "__main__":
    host = os.getenv("STREAMLIT_HOST", "0.0.0.0")
    port = os.getenv("STREAMLIT_PORT", "8501")

    sys.argv = [
        "streamlit",
        "run",
        "app.py",
        "--server.address", host,
        "--server.port", port,
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false",
        "--theme.base", "light",
        "--theme.primaryColor", PRIMARY_COLOR,
        "--client.toolbarMode", "minimal",
    ]

    stcli.main()
