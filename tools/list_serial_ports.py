#!/usr/bin/env python3
"""List serial ports to use as serial.port in config/midistream.yaml."""

import sys

from serial.tools import list_ports


def list_serial_ports():
    """Collect the serial ports pyserial can see."""
    ports = []
    for info in sorted(list_ports.comports(), key=lambda p: p.device):
        ports.append({
            'device': info.device,
            'description': info.description or '',
            'hwid': info.hwid or ''
        })
    return ports


if __name__ == "__main__":
    ports = list_serial_ports()

    if not ports:
        print("No serial ports found")
        sys.exit(1)

    print(f"{'Device':<24} {'Description'}")
    print("-" * 60)

    for port in ports:
        print(f"{port['device']:<24} {port['description']}")
