"""Web API for the MIDI stream monitor.

Provides REST endpoints for status, recent messages and parser control.
"""

from flask import Flask, jsonify, request
from flask_cors import CORS
import threading
import time
from typing import Optional
import logging
from .actions import Actions

logger = logging.getLogger('midistream.api')


class MonitorWebAPI:
    """Web API server for the monitor."""

    def __init__(self, controller, host='0.0.0.0', port=5000):
        """Initialize the web API.

        Args:
            controller: Reference to MidiMonitor instance
            host: Host to bind to (default: 0.0.0.0 for all interfaces)
            port: Port to bind to (default: 5000)
        """
        self.controller = controller
        self.actions = Actions(controller)
        self.host = host
        self.port = port
        self.app = Flask(__name__)
        CORS(self.app)

        self._setup_routes()
        self.server_thread: Optional[threading.Thread] = None

    def _setup_routes(self):
        """Set up API routes."""

        @self.app.route('/api/health', methods=['GET'])
        def health():
            """Health check endpoint."""
            return jsonify({
                'status': 'ok',
                'running': self.controller.running,
                'timestamp': time.time()
            })

        @self.app.route('/api/status', methods=['GET'])
        def status():
            """Get monitor status and message counters."""
            result = self.actions.get_status()
            if result['success']:
                result.pop('success')
                return jsonify(result)
            else:
                return jsonify({'error': result.get('error', 'Unknown error')}), 500

        @self.app.route('/api/messages', methods=['GET'])
        def messages():
            """Get recently decoded messages."""
            limit = request.args.get('limit', default=0, type=int)
            result = self.actions.get_recent_messages(limit)
            if result['success']:
                return jsonify({'messages': result['messages']})
            else:
                return jsonify({'error': result.get('error', 'Unknown error')}), 400

        @self.app.route('/api/parser', methods=['GET'])
        def parser_state():
            """Get the parser state."""
            result = self.actions.get_parser_state()
            if result['success']:
                result.pop('success')
                return jsonify(result)
            else:
                return jsonify({'error': result.get('error', 'Unknown error')}), 500

        @self.app.route('/api/parser/reset', methods=['POST'])
        def parser_reset():
            """Reset the parser."""
            result = self.actions.reset_parser()
            if result['success']:
                logger.info("API: Parser reset")
                return jsonify(result)
            else:
                return jsonify(result), 500

        @self.app.route('/api/stats/clear', methods=['POST'])
        def stats_clear():
            """Clear counters and history."""
            result = self.actions.clear_stats()
            if result['success']:
                logger.info(f"API: Statistics cleared ({result['count']} messages)")
                return jsonify(result)
            else:
                return jsonify(result), 500

    def start(self):
        """Start the API server in a background thread."""
        def run_server():
            logger.info(f"Starting web API on {self.host}:{self.port}")
            # Keep werkzeug's request log out of the console
            log = logging.getLogger('werkzeug')
            log.setLevel(logging.WARNING)
            self.app.run(host=self.host, port=self.port, debug=False, use_reloader=False)

        self.server_thread = threading.Thread(target=run_server, daemon=True)
        self.server_thread.start()
        logger.info("Web API server started")

    def stop(self):
        """Stop the API server."""
        # Flask has no clean shutdown when running in a thread,
        # the daemon thread ends with the process
        logger.info("Web API server stopping")
