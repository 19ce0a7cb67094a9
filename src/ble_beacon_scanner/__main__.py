"""
Entry point for running the beacon scanner as a module.

Usage:
    python -m ble_beacon_scanner
    python -m ble_beacon_scanner -v --duration 30
"""

from .main import main

if __name__ == "__main__":
    main()
