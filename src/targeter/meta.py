# src/targeter/meta.py
"""Program identity shared by logging, config lookup and the test suite."""

# --- program identity ---
PROGRAM_PACKAGE: str = "targeter"
PROGRAM_DISPLAY: str = "Targeter"
PROGRAM_ENV: str = "TARGETER"
PROGRAM_CONFIG: str = "targeter"
