"""MIDI output for decoded messages.

Forwards messages decoded from the serial stream to a
mido output port (a synth, a virtual port, a USB interface).
"""

from typing import Optional

import mido

from ..logic.messages import ParsedMessage
from ..util.logging import get_logger

logger = get_logger('midi_output')


class MidiOutput:
    """Handles MIDI output to external devices."""

    def __init__(self, port_name: str):
        """Initialize MIDI output handler.

        Args:
            port_name: mido output port name (e.g., "FLUID Synth:Synth input port 128:0")
        """
        self.port_name = port_name
        self.port: Optional[mido.ports.BaseOutput] = None
        self.sent_count = 0

    def start(self):
        """Open the MIDI output port."""
        try:
            logger.info(f"Opening MIDI output port: {self.port_name}")
            self.port = mido.open_output(self.port_name)
            logger.info("MIDI output port opened successfully")
        except Exception as e:
            logger.error(f"Failed to open MIDI output port: {e}")
            raise

    def send_message(self, msg: mido.Message):
        """Send a MIDI message to the output port.

        Args:
            msg: MIDI message to send
        """
        if not self.port:
            logger.warning("MIDI output port not open")
            return

        try:
            self.port.send(msg)
            self.sent_count += 1
            logger.debug(f"Sent MIDI: {msg}")
        except Exception as e:
            logger.error(f"Failed to send MIDI message: {e}")

    def send_parsed(self, message: ParsedMessage):
        """Forward a decoded message, skipping codes mido cannot send.

        Args:
            message: Message completed by the parser
        """
        msg = message.to_mido()
        if msg is None:
            logger.debug(f"Not forwarding {message.name}")
            return
        self.send_message(msg)

    def send_sysex(self, payload: bytes):
        """Forward a captured SYSEX payload as a single sysex message."""
        self.send_message(mido.Message('sysex', data=payload))

    def stop(self):
        """Close the MIDI output port."""
        if self.port:
            logger.info("Closing MIDI output port")
            self.port.close()
            self.port = None
