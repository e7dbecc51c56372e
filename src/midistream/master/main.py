"""Main entry point for the MIDI stream monitor.

Loads configuration, opens the serial input and optional
MIDI output, starts the web API and runs the read loop.
"""

import sys
import signal
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from ..inputs.serial_input import MIDI_BAUDRATE, SerialMidiInput
from ..logic.messages import REALTIME, ParsedMessage
from ..logic.sysex import DEFAULT_MAX_LENGTH
from ..outputs.midi_forward import MidiOutput
from ..util.logging import get_logger, parse_level, setup_logging
from .state import DEFAULT_HISTORY_SIZE, MonitorState
from .web_api import MonitorWebAPI

logger = get_logger('main')

DEFAULT_CONFIG_PATH = "config/midistream.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    'serial': {
        'port': None,
        'baudrate': MIDI_BAUDRATE,
        'timeout': 0.1,
    },
    'sysex': {
        'capture': True,
        'max_length': DEFAULT_MAX_LENGTH,
    },
    'output_port': None,
    'history_size': DEFAULT_HISTORY_SIZE,
    'web_api': {
        'enabled': False,
        'host': '0.0.0.0',
        'port': 5000,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


def merge_config(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay loaded settings on the defaults, one level of sections deep."""
    merged = {}
    for key, value in defaults.items():
        if isinstance(value, dict):
            section = overrides.get(key) or {}
            if not isinstance(section, dict):
                raise ValueError(f"Configuration section '{key}' must be a mapping")
            merged[key] = {**value, **section}
        else:
            merged[key] = overrides.get(key, value)
    for key, value in overrides.items():
        merged.setdefault(key, value)
    return merged


def load_config(config_path: str) -> Dict[str, Any]:
    """Load monitor configuration from a YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary with defaults filled in
    """
    config_file = Path(config_path)
    logger.info(f"Loading configuration from: {config_file}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a mapping")
        config = merge_config(DEFAULT_CONFIG, config)
        logger.info("Configuration loaded successfully")
        return config
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise


class MidiMonitor:
    """Serial MIDI monitor service."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH, install_signal_handlers: bool = True):
        """Initialize the monitor.

        Args:
            config_path: Path to monitor configuration file
            install_signal_handlers: Stop cleanly on SIGINT/SIGTERM
        """
        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self.state = MonitorState()
        self.parser_lock = threading.Lock()
        self.midi_input: Optional[SerialMidiInput] = None
        self.midi_output: Optional[MidiOutput] = None
        self.web_api: Optional[MonitorWebAPI] = None
        self.running = False

        if install_signal_handlers:
            signal.signal(signal.SIGINT, self._signal_handler)
            signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals gracefully."""
        logger.info(f"Received signal {signum}, shutting down...")
        self.stop()

    def on_message(self, message: ParsedMessage):
        """Callback for every decoded message.

        Args:
            message: Message completed by the parser
        """
        # Clock and active sensing arrive many times a second
        if message.kind == REALTIME:
            logger.debug(f"Received: {message}")
        else:
            logger.info(f"Received: {message}")

        self.state.record_message(message)

        if self.midi_output:
            self.midi_output.send_parsed(message)

    def on_sysex(self, payload: bytes):
        """Callback for every completed SYSEX dump.

        Args:
            payload: Bytes between SYSEX and ENDEX
        """
        logger.info(f"Received SYSEX dump: {len(payload)} bytes")
        self.state.record_sysex(payload)

        if self.midi_output:
            self.midi_output.send_sysex(payload)

    def reset_parser(self):
        """Reset the serial input's parser."""
        if self.midi_input:
            self.midi_input.reset()

    def setup(self) -> bool:
        """Load configuration and open inputs and outputs.

        Returns:
            True if the monitor is ready to run
        """
        self.config = load_config(self.config_path)

        log_config = self.config['logging']
        setup_logging(level=parse_level(log_config.get('level')), log_file=log_config.get('file'))

        serial_config = self.config['serial']
        serial_port = serial_config.get('port')
        if not serial_port:
            logger.error("Serial port not configured")
            return False

        logger.info(f"Serial port: {serial_port}")
        self.state = MonitorState(int(self.config['history_size']))

        output_port = self.config.get('output_port')
        if output_port:
            logger.info(f"Output port: {output_port}")
            self.midi_output = MidiOutput(output_port)
            self.midi_output.start()

        sysex_config = self.config['sysex']
        self.midi_input = SerialMidiInput(
            serial_port,
            self.on_message,
            baudrate=int(serial_config['baudrate']),
            timeout=float(serial_config['timeout']),
            sysex_callback=self.on_sysex if sysex_config.get('capture') else None,
            max_sysex_length=int(sysex_config['max_length']),
            lock=self.parser_lock,
        )
        self.midi_input.start()

        web_config = self.config['web_api']
        if web_config.get('enabled'):
            self.web_api = MonitorWebAPI(self, host=web_config['host'], port=int(web_config['port']))
            self.web_api.start()

        self.running = True
        return True

    def start(self):
        """Start the monitor service."""
        logger.info("=== MIDI Monitor Starting ===")

        if not self.setup():
            return

        # Start processing (this blocks)
        logger.info("=== MIDI Monitor Running ===")
        self.midi_input.process_messages()

    def stop(self):
        """Stop the monitor service."""
        if not self.running:
            return

        logger.info("=== MIDI Monitor Stopping ===")
        self.running = False

        if self.midi_input:
            self.midi_input.stop()

        if self.midi_output:
            self.midi_output.stop()

        if self.web_api:
            self.web_api.stop()

        logger.info("=== MIDI Monitor Stopped ===")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    config_path = args[0] if args else DEFAULT_CONFIG_PATH

    setup_logging(level=logging.INFO)

    controller = MidiMonitor(config_path)

    try:
        controller.start()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        controller.stop()


if __name__ == "__main__":
    main()
