"""
Unified actions for the MIDI stream monitor.

This module provides a single implementation of the control and
inspection actions used by the web API.
"""

import logging
import time
from typing import Any, Dict

logger = logging.getLogger(__name__)


class Actions:
    """Unified actions for monitor control."""

    def __init__(self, controller):
        """Initialize actions with controller reference.

        Args:
            controller: MidiMonitor instance
        """
        self.controller = controller

    def get_status(self) -> Dict[str, Any]:
        """Get monitor status.

        Returns:
            dict with 'success' (bool), 'running' (bool), 'serial_port' (str),
            'total_messages' (int), 'counts' (dict), 'sysex_dumps' (int),
            'forwarded' (int), and optional 'error' (str)
        """
        try:
            state = self.controller.state
            midi_input = self.controller.midi_input
            midi_output = self.controller.midi_output
            return {
                'success': True,
                'running': self.controller.running,
                'serial_port': midi_input.port_name if midi_input else None,
                'output_port': midi_output.port_name if midi_output else None,
                'uptime': time.time() - state.started_at,
                'total_messages': state.total_messages,
                'counts': state.counts(),
                'sysex_dumps': state.sysex_dumps,
                'sysex_bytes': state.sysex_bytes,
                'forwarded': midi_output.sent_count if midi_output else 0,
            }
        except Exception as e:
            logger.error(f"Error getting status: {e}")
            return {
                'success': False,
                'error': str(e)
            }

    def get_recent_messages(self, limit: int = 0) -> Dict[str, Any]:
        """Get the most recently decoded messages.

        Args:
            limit: Maximum number of messages, 0 for everything kept

        Returns:
            dict with 'success' (bool), 'messages' (list of dicts),
            and optional 'error' (str)
        """
        try:
            if limit < 0:
                return {
                    'success': False,
                    'error': f'Invalid limit: {limit}'
                }
            return {
                'success': True,
                'messages': self.controller.state.recent(limit)
            }
        except Exception as e:
            logger.error(f"Error getting recent messages: {e}")
            return {
                'success': False,
                'error': str(e)
            }

    def get_parser_state(self) -> Dict[str, Any]:
        """Get the parser's current message, pending count and data bytes.

        Returns:
            dict with 'success' (bool), 'message' (int), 'expected' (int),
            'data' (list), 'in_sysex' (bool), and optional 'error' (str)
        """
        try:
            midi_input = self.controller.midi_input
            if not midi_input:
                return {
                    'success': False,
                    'error': 'Serial input not initialized'
                }
            with midi_input.lock:
                parser = midi_input.parser
                return {
                    'success': True,
                    'message': parser.message,
                    'expected': parser.expected,
                    'data': [parser.data_a, parser.data_b],
                    'in_sysex': parser.expected < 0,
                }
        except Exception as e:
            logger.error(f"Error getting parser state: {e}")
            return {
                'success': False,
                'error': str(e)
            }

    def reset_parser(self) -> Dict[str, Any]:
        """Reset the parser, abandoning any partial message.

        Returns:
            dict with 'success' (bool) and optional 'error' (str)
        """
        try:
            if not self.controller.midi_input:
                return {
                    'success': False,
                    'error': 'Serial input not initialized'
                }
            self.controller.reset_parser()
            return {'success': True}
        except Exception as e:
            logger.error(f"Error resetting parser: {e}")
            return {
                'success': False,
                'error': str(e)
            }

    def clear_stats(self) -> Dict[str, Any]:
        """Clear message counters and history.

        Returns:
            dict with 'success' (bool), 'count' (int), and optional 'error' (str)
        """
        try:
            count = self.controller.state.total_messages
            self.controller.state.clear()
            logger.info(f"Statistics cleared ({count} messages)")
            return {
                'success': True,
                'count': count
            }
        except Exception as e:
            logger.error(f"Error clearing statistics: {e}")
            return {
                'success': False,
                'error': str(e)
            }
