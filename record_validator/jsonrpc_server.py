#!/usr/bin/env python3
"""
JSON-RPC 2.0 Server for ValidationService

Exposes record validation to any process that can spawn a child and talk
newline-delimited JSON over stdin/stdout.

Protocol: JSON-RPC 2.0 over stdin/stdout (newline-delimited JSON)
Specification: https://www.jsonrpc.org/specification

Usage:
    python -m record_validator.jsonrpc_server [--config PATH] [--debug]

Example request (stdin):
    {"jsonrpc":"2.0","id":1,"method":"validate","params":{"record_type":"applicant","data":{"Age":17}}}

Example response (stdout):
    {"jsonrpc":"2.0","id":1,"result":{"valid":false,"errors":[...]}}
"""

import sys
import json
import signal
import logging
import argparse
from typing import Any, Dict, Optional

from record_validator.api import ValidationService
from record_validator.errors import ConfigError, NotAStructError, RecordTypeError

logger = logging.getLogger(__name__)


class ValidationJsonRpcServer:
    """JSON-RPC 2.0 server wrapping ValidationService API."""

    # JSON-RPC error codes
    ERROR_PARSE = -32700        # Invalid JSON
    ERROR_INVALID_REQUEST = -32600  # Invalid JSON-RPC structure
    ERROR_METHOD_NOT_FOUND = -32601  # Unknown method
    ERROR_INVALID_PARAMS = -32602   # Invalid parameters
    ERROR_INTERNAL = -32000      # Application error (catch-all)
    ERROR_RECORD = -32001        # Record type cannot be resolved or built

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize JSON-RPC server.

        Args:
            config_path: YAML config file passed to ValidationService
        """
        self.service = ValidationService(config_path)
        self.running = False

        # Method dispatch table
        self.methods = {
            'validate': self._handle_validate,
            'describe_record': self._handle_describe_record,
            'list_record_types': self._handle_list_record_types,
            'reload_config': self._handle_reload_config,
        }

    def start_server(self, stdin=None, stdout=None):
        """
        Start the JSON-RPC server loop.

        Reads requests from stdin, processes them, writes responses to stdout.
        Runs until EOF or stop signal received.
        """
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        self.running = True
        logger.debug("ValidationService JSON-RPC server started")

        while self.running:
            try:
                line = stdin.readline()

                if not line:
                    logger.debug("EOF received, shutting down")
                    break

                if not line.strip():
                    continue

                logger.debug(f"Received: {line.strip()}")
                response = self.handle_request(line)
                self._send_response(response, stdout)

            except KeyboardInterrupt:
                logger.debug("KeyboardInterrupt received, shutting down")
                break

        logger.debug("Server stopped")

    def stop_server(self):
        """
        Stop the server gracefully.

        Sets running flag to False, causing the main loop to exit.
        """
        self.running = False
        logger.debug("Stop signal received")

    def handle_request(self, request_json: str) -> Dict[str, Any]:
        """
        Parse and process a JSON-RPC request.

        Args:
            request_json: JSON-RPC request string

        Returns:
            JSON-RPC response dict (success or error)
        """
        request_id = None

        try:
            try:
                request = json.loads(request_json)
            except json.JSONDecodeError as e:
                return self._error_response(None, self.ERROR_PARSE,
                                            f"Parse error: {e}")

            if not isinstance(request, dict):
                return self._error_response(None, self.ERROR_INVALID_REQUEST,
                                            "Request must be a JSON object")

            if request.get("jsonrpc") != "2.0":
                return self._error_response(None, self.ERROR_INVALID_REQUEST,
                                            f"Invalid JSON-RPC version: {request.get('jsonrpc')}")

            request_id = request.get("id")
            method = request.get("method")
            params = request.get("params", {})

            if not method:
                return self._error_response(request_id, self.ERROR_INVALID_REQUEST,
                                            "Missing 'method' field")

            if not isinstance(params, dict):
                return self._error_response(request_id, self.ERROR_INVALID_PARAMS,
                                            f"Params must be an object, got {type(params).__name__}")

            if method not in self.methods:
                return self._error_response(request_id, self.ERROR_METHOD_NOT_FOUND,
                                            f"Method not found: {method}")

            logger.debug(f"Dispatching method: {method}")
            result = self.methods[method](params)

            return self._success_response(request_id, result)

        except (RecordTypeError, NotAStructError) as e:
            return self._error_response(request_id, self.ERROR_RECORD, str(e))

        except ConfigError as e:
            return self._error_response(request_id, self.ERROR_INTERNAL, f"Config error: {e}")

        except ValueError as e:
            return self._error_response(request_id, self.ERROR_INVALID_PARAMS, str(e))

        except Exception as e:
            logger.exception(f"Error processing request: {e}")
            return self._error_response(request_id, self.ERROR_INTERNAL,
                                        f"Internal error: {e}")

    # Method handlers - wrap ValidationService API

    def _handle_validate(self, params: Dict[str, Any]) -> Any:
        """Handle 'validate' method."""
        record_type = params.get('record_type')
        data = params.get('data')

        if not record_type or not isinstance(record_type, str):
            raise ValueError("Missing required parameter: record_type (must be a string)")
        if not isinstance(data, dict):
            raise ValueError("Missing required parameter: data (must be an object)")

        return self.service.validate(record_type, data)

    def _handle_describe_record(self, params: Dict[str, Any]) -> Any:
        """Handle 'describe_record' method."""
        record_type = params.get('record_type')

        if not record_type or not isinstance(record_type, str):
            raise ValueError("Missing required parameter: record_type (must be a string)")

        return self.service.describe_record(record_type)

    def _handle_list_record_types(self, params: Dict[str, Any]) -> Any:
        """Handle 'list_record_types' method."""
        return self.service.list_record_types()

    def _handle_reload_config(self, params: Dict[str, Any]) -> Any:
        """Handle 'reload_config' method."""
        self.service.reload_config()
        return {"status": "ok", "message": "Config reloaded successfully"}

    # Response formatting

    def _success_response(self, request_id: Any, result: Any) -> Dict[str, Any]:
        """Format successful JSON-RPC response."""
        return {
            "jsonrpc": "2.0",
            "id": request_id,
            "result": result
        }

    def _error_response(self, request_id: Any, code: int, message: str,
                        data: Optional[Any] = None) -> Dict[str, Any]:
        """Format JSON-RPC error response."""
        error = {
            "code": code,
            "message": message
        }
        if data is not None:
            error["data"] = data

        return {
            "jsonrpc": "2.0",
            "id": request_id,
            "error": error
        }

    def _send_response(self, response: Dict[str, Any], stdout):
        """Send JSON-RPC response to stdout."""
        response_json = json.dumps(response)
        logger.debug(f"Sending: {response_json}")
        stdout.write(response_json + "\n")
        stdout.flush()


def main():
    """Main entry point for JSON-RPC server."""
    parser = argparse.ArgumentParser(
        description="record-validator JSON-RPC 2.0 Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example usage:
  python -m record_validator.jsonrpc_server --config validator-config.yaml
  python -m record_validator.jsonrpc_server --debug

Supported methods:
  - validate
  - describe_record
  - list_record_types
  - reload_config

Protocol: JSON-RPC 2.0 over stdin/stdout
See: https://www.jsonrpc.org/specification
        """
    )
    parser.add_argument('--config', default=None,
                        help='Path to YAML config (defaults to the bundled config)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging to stderr')

    args = parser.parse_args()

    server = ValidationJsonRpcServer(config_path=args.config)

    # stdout carries protocol traffic, so logs go to stderr
    level = "DEBUG" if args.debug else server.service.config_loader.get_log_level()
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Handle signals for graceful shutdown
    def signal_handler(sig, frame):
        server.stop_server()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    # Start server (blocks until stopped)
    server.start_server()


if __name__ == "__main__":
    main()
