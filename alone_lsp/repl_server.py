from __future__ import annotations

"""
Simple TCP REPL server for Alone.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(begin ...)"}
- Response: {"ok": true, "result": <rendered value>}
         or {"ok": false, "error": <message>, "kind": <error class name>}

The server keeps a single Interpreter alive so that definitions persist across
evaluations and across clients.
"""

import json
import logging
import socket
import threading
from typing import Any, Dict, Optional, Tuple

from alone.config import get_repl_address
from alone.interpreter import Interpreter
from alone.types.errors import AloneError
from alone.types.value import to_string

logger = logging.getLogger(__name__)


class ReplServer:
    def __init__(self, host: Optional[str] = None, port: Optional[int] = None):
        default_host, default_port = get_repl_address()
        self.host = host or default_host
        self.port = port if port is not None else default_port
        # Keep a single interpreter to maintain session state
        self.interp = Interpreter()
        # The environment is not safe for concurrent mutation
        self._lock = threading.Lock()

    def handle_request(self, req: Dict[str, Any]) -> Dict[str, Any]:
        """Serve one decoded request; never raises for Alone-level failures."""
        if req.get("cmd") != "eval":
            return {"ok": False, "error": f"Unknown cmd: {req.get('cmd')}", "kind": "RequestError"}
        code = req.get("code", "")
        if not isinstance(code, str):
            return {"ok": False, "error": "code must be a string", "kind": "RequestError"}
        with self._lock:
            try:
                result = self.interp.eval(code)
            except AloneError as ex:
                return {"ok": False, "error": str(ex), "kind": type(ex).__name__}
        return {"ok": True, "result": to_string(result)}

    def handle_line(self, line: bytes) -> bytes:
        try:
            req = json.loads(line.decode("utf-8"))
            if not isinstance(req, dict):
                raise ValueError("request must be a JSON object")
            resp = self.handle_request(req)
        except (UnicodeDecodeError, ValueError) as ex:
            logger.warning("invalid request %r: %s", line, ex)
            resp = {"ok": False, "error": f"Invalid request: {ex}", "kind": "RequestError"}
        return (json.dumps(resp) + "\n").encode("utf-8")

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("REPL server listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug("client connected: %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    conn.sendall(self.handle_line(line))


def main():
    logging.basicConfig(level=logging.INFO)
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
