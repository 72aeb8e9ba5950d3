#!/usr/bin/env python3
"""
Interactive Kai listener.

Connects to the local Kai service, subscribes to gestures and orientation,
and prints everything it receives until interrupted.

Usage: gesture_listener.py [module-id] [module-secret] [url]
"""

import sys
import time
import logging
from pathlib import Path

# Add SDK to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kaisdk import Capability, EventKind, KaiSDK, Scope, SerialTransport
from kaisdk.transport.serial import DEFAULT_URL

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)


def main():
    module_id = sys.argv[1] if len(sys.argv) > 1 else "kaisdk-example"
    module_secret = sys.argv[2] if len(sys.argv) > 2 else "qwerty"
    url = sys.argv[3] if len(sys.argv) > 3 else DEFAULT_URL

    kai = KaiSDK(transport=SerialTransport(url=url))
    kai.initialise(module_id, module_secret)

    kai.on(Scope.ANY, EventKind.GESTURE,
           lambda dev, r: print(f"Kai {dev.kai_id}: gesture {r.gesture.value}"))
    kai.on(Scope.ANY, EventKind.UNKNOWN_GESTURE,
           lambda dev, r: print(f"Kai {dev.kai_id}: unknown gesture {r.gesture!r}"))
    kai.on(Scope.DEFAULT, EventKind.PYR,
           lambda dev, r: print(f"\rpitch {r.pitch:7.2f} yaw {r.yaw:7.2f} roll {r.roll:7.2f}", end=""))
    kai.on_error(lambda e: print(f"Service error {e.code} {e.name}: {e.message}"))

    print(f"Connecting to {url}...")
    if not kai.connect():
        print("Failed to connect! Is the Kai service running?")
        return

    try:
        print("Waiting for authentication...")
        start = time.time()
        while not kai.authenticated and time.time() - start < 5.0:
            time.sleep(0.05)

        if not kai.authenticated:
            print("Module was not authenticated.")
            return

        kai.set_capabilities(Capability.GESTURE | Capability.PYR)
        print("Listening (Ctrl+C to stop)...")
        while True:
            time.sleep(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        print("\nDisconnecting...")
        kai.disconnect()
        print("Done.")


if __name__ == "__main__":
    main()
