#!/usr/bin/env python3
"""Run the Mi Air driver against a PC agent.

Creates the device, polls the agent every ``rfrate`` seconds and prints
every capability event.  Optionally sends one command first.

Usage
-----
::

    export MIAIR_PCADDR="192.168.1.20:5001"
    python scripts/run_driver.py

Options::

    --pcaddr ADDR        PC agent address (overrides MIAIR_PCADDR)
    --rfrate SECONDS     Poll interval (overrides MIAIR_RFRATE)
    --once               Poll once and exit
    --switch on|off      Send a switch command before polling
    --fan-speed 0-4      Send a setFanSpeed command before polling
    --json               Print events as JSON lines
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pymiair import CapabilityCommand, CapabilityEvent, Device, MiAirConfig, MiAirDriver  # noqa: E402
from pymiair.exceptions import MiAirConfigError  # noqa: E402


def _printer(json_mode: bool) -> Any:
    def _print_event(device: Device, event: CapabilityEvent) -> None:
        if json_mode:
            print(json.dumps({"device": device.device_network_id, **event.model_dump(mode="json")}))
            return
        unit = f" {event.unit}" if event.unit else ""
        print(f"{device.label}: {event.capability}.{event.attribute} = {event.value}{unit}")

    return _print_event


async def main() -> int:
    parser = argparse.ArgumentParser(description="Poll a Mi Air PC agent and print capability events.")
    parser.add_argument("--pcaddr", help="PC agent address (default: MIAIR_PCADDR)")
    parser.add_argument("--rfrate", type=int, help="Poll interval in seconds (default: MIAIR_RFRATE)")
    parser.add_argument("--once", action="store_true", help="Poll once and exit")
    parser.add_argument("--switch", choices=("on", "off"), help="Send a switch command first")
    parser.add_argument("--fan-speed", type=int, choices=range(0, 5), help="Send a setFanSpeed command first")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Print events as JSON lines")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    overrides: dict[str, Any] = {}
    if args.pcaddr:
        overrides["pcaddr"] = args.pcaddr
    if args.rfrate:
        overrides["rfrate"] = args.rfrate
    try:
        config = MiAirConfig.from_env(**overrides)
    except MiAirConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not config.preferences.pcaddr:
        print("No PC address configured (set MIAIR_PCADDR or pass --pcaddr)", file=sys.stderr)
        return 2

    async with MiAirDriver(config, on_event=_printer(args.json_mode)) as driver:
        device = await driver.discover()

        if args.switch:
            await driver.handle_command(device, CapabilityCommand(capability="switch", command=args.switch))
        if args.fan_speed is not None:
            await driver.handle_command(
                device,
                CapabilityCommand(capability="fanSpeed", command="setFanSpeed", args={"speed": args.fan_speed}),
            )

        await driver.handle_command(device, CapabilityCommand(capability="refresh", command="refresh"))
        if args.once:
            return 0 if device.is_online else 1

        # Polling continues on the scheduler until interrupted.
        await asyncio.Event().wait()
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)
