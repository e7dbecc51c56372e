"""Serial MIDI input handler.

Reads raw bytes from a serial port (a 5-pin DIN interface, a
microcontroller bridge, or any pyserial URL) and turns them into
decoded messages.
"""

import threading
from typing import Callable, Optional

import serial

from ..logic.messages import ParsedMessage
from ..logic.parser import Parser
from ..logic.sysex import DEFAULT_MAX_LENGTH, SysexCollector
from ..util.logging import get_logger

logger = get_logger('serial_input')

MIDI_BAUDRATE = 31250
READ_CHUNK = 64


class SerialMidiInput:
    """Handles MIDI input from a serial port."""

    def __init__(self, port_name: str, callback: Callable[[ParsedMessage], None],
                 baudrate: int = MIDI_BAUDRATE, timeout: float = 0.1,
                 sysex_callback: Optional[Callable[[bytes], None]] = None,
                 max_sysex_length: int = DEFAULT_MAX_LENGTH,
                 lock: Optional[threading.Lock] = None):
        """Initialize serial input handler.

        Args:
            port_name: Device path or pyserial URL (e.g., "/dev/ttyAMA0", "loop://")
            callback: Function to call for every completed message
            baudrate: Serial speed, 31250 for a real MIDI line
            timeout: Read timeout in seconds so the loop can notice stop()
            sysex_callback: Function to call with each completed SYSEX payload
            max_sysex_length: Largest SYSEX payload kept
            lock: Lock held while the parser is touched, when shared
        """
        self.port_name = port_name
        self.callback = callback
        self.baudrate = baudrate
        self.timeout = timeout
        self.sysex_callback = sysex_callback
        self.parser = Parser()
        self.sysex = SysexCollector(max_sysex_length)
        self.lock = lock or threading.Lock()
        self.port: Optional[serial.SerialBase] = None
        self.running = False

    def start(self):
        """Open the serial port."""
        try:
            logger.info(f"Opening serial port: {self.port_name} @ {self.baudrate} baud")
            self.port = serial.serial_for_url(
                self.port_name, baudrate=self.baudrate, timeout=self.timeout
            )
            self.running = True
            logger.info("Serial port opened successfully")
        except Exception as e:
            logger.error(f"Failed to open serial port: {e}")
            raise

    def process_bytes(self, data: bytes) -> int:
        """Run raw bytes through the parser and dispatch what completes.

        Args:
            data: Bytes as read from the transport

        Returns:
            Number of completed messages
        """
        completed = []
        payloads = []
        with self.lock:
            for byte in data:
                code = self.parser.accept(byte)
                if code is not None:
                    completed.append(self.parser.snapshot(code))
                if self.sysex_callback:
                    payload = self.sysex.observe(byte, code)
                    if payload is not None:
                        payloads.append((len(completed), payload))

        # Callbacks run outside the lock, in stream order
        pending = iter(payloads)
        next_payload = next(pending, None)
        for index, message in enumerate(completed, start=1):
            self.callback(message)
            while next_payload is not None and next_payload[0] == index:
                self.sysex_callback(next_payload[1])
                next_payload = next(pending, None)
        return len(completed)

    def process_messages(self):
        """Read and decode bytes until stopped (blocking call)."""
        if not self.port or not self.running:
            logger.warning("Serial input not started")
            return

        logger.info("Starting serial read loop")
        try:
            while self.running and self.port is not None:
                data = self.port.read(self.port.in_waiting or 1)
                if data:
                    self.process_bytes(data)
        except KeyboardInterrupt:
            logger.info("Serial input interrupted by user")
        except Exception as e:
            if not self.running:
                # stop() closed the port under a pending read
                logger.debug(f"Serial read ended by stop(): {e}")
                return
            logger.error(f"Error reading serial port: {e}")
            raise

    def reset(self):
        """Reset the parser and drop any SYSEX dump in progress."""
        with self.lock:
            self.parser.reset()
            self.sysex.reset()
        logger.info("Parser reset")

    def stop(self):
        """Stop reading and close the port."""
        self.running = False
        if self.port:
            logger.info("Closing serial port")
            self.port.close()
            self.port = None
