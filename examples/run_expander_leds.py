import argparse
import logging
import sys
import time
from pathlib import Path

# Ensure local repo package is used even if another "expander" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from expander import Expander, MCP23008Chip, MCP23017Chip, SimulatedBus, SMBusTransport

CHIPS = {"MCP23008": MCP23008Chip, "MCP23017": MCP23017Chip}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Light every LED on an I/O expander.")
    parser.add_argument(
        "--controller",
        default="MCP23008",
        choices=sorted(CHIPS),
        help="Expander family",
    )
    parser.add_argument(
        "--bus",
        type=int,
        default=None,
        help="Linux I2C bus number; omit to run against a simulated chip",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=4,
        help="Number of on/off toggles",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.25,
        help="Seconds between toggles",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every bus write")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    chip = None
    if args.bus is None:
        transport = SimulatedBus()
        chip = transport.attach(CHIPS[args.controller]())
    else:
        transport = SMBusTransport(bus=args.bus)

    try:
        expander = Expander(args.controller, transport, initialize=False)
        expander.on("ready", lambda: print(f"{expander.name} ready, {expander.pin_count} pins"))
        expander.initialize()

        for step in range(args.steps):
            level = expander.HIGH if step % 2 == 0 else expander.LOW
            for pin in range(expander.pin_count):
                expander.digital_write(pin, level)
            if chip is not None:
                ports = range(chip.descriptor.port_count)
                print("PORTS", " ".join(f"0x{chip.port_state(p):02X}" for p in ports))
            time.sleep(args.delay)
    finally:
        if isinstance(transport, SMBusTransport):
            transport.close()


if __name__ == "__main__":
    main()
