from __future__ import annotations

"""
Simple TCP REPL server for Forsp.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(1 2 cons print)"}
- Response: {"ok": true, "output": "(2 . 1)\n", "stack": "()"}
            or {"ok": false, "error": "FAIL: Value Stack Underflow"}

A single Interpreter is kept alive so that definitions persist across
evaluations. Requests are serialized on it; a failed evaluation clears the
stack and leaves the environment as it was before the request.
"""

import io
import json
import logging
import socket
import sys
import threading
from typing import Tuple

from forsp.config import configure_logging, get_repl_address, get_recursion_limit
from forsp.errors import ForspError
from forsp.interpreter import Interpreter
from forsp.printer import print_obj
from forsp.types.nil import Nil

log = logging.getLogger(__name__)


class ReplServer:
    def __init__(self, host: str | None = None, port: int | None = None, prelude=None):
        default_host, default_port = get_repl_address()
        self.host = host or default_host
        self.port = port if port is not None else default_port
        # Keep a single interpreter to maintain session state
        self.interp = Interpreter(prelude=prelude)
        self.lock = threading.Lock()

    def evaluate(self, code: str) -> dict:
        with self.lock:
            out = io.StringIO()
            self.interp.out = out
            env = self.interp.env
            try:
                self.interp.run(code)
            except (ForspError, RecursionError) as ex:
                self.interp.env = env
                self.interp.stack = Nil
                error = ex.describe() if isinstance(ex, ForspError) else f"ERROR: {ex}"
                return {"ok": False, "error": error, "output": out.getvalue()}
            finally:
                self.interp.out = None
            return {"ok": True, "output": out.getvalue(), "stack": print_obj(self.interp.stack)}

    def handle_request(self, line: bytes) -> dict:
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        if not isinstance(req, dict):
            return {"ok": False, "error": "Invalid request: expected a JSON object"}
        if req.get("cmd") != "eval":
            return {"ok": False, "error": f"Unknown cmd: {req.get('cmd')}"}
        return self.evaluate(str(req.get("code", "")))

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            log.info("listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        log.debug("client connected: %s:%d", *addr)
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
                    resp = self.handle_request(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))


def main():
    configure_logging()
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
