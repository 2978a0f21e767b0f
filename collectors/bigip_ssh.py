"""BIG-IP collector - runs the log retrieval command over SSH"""
import logging
import os

import paramiko

from config.commands import BANDWIDTH_LOG_COMMAND, NO_MATCH_EXIT_CODES
from config.settings import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_KEEPALIVE_INTERVAL,
    DEFAULT_SESSION_TIMEOUT,
)

logger = logging.getLogger(__name__)


def interpret_exit_status(exit_status, stdout, stderr=""):
    """
    Decide whether a finished remote command produced a usable result

    Exit status 0 returns stdout. An exit status listed in
    NO_MATCH_EXIT_CODES means grep selected nothing and is an empty result.
    Anything else, including a missing exit status, is a transport error.

    Returns:
        tuple: (output or None, error message or None)
    """
    if exit_status == 0:
        return stdout, None
    if exit_status in NO_MATCH_EXIT_CODES:
        return "", None
    if exit_status is None or exit_status < 0:
        return None, "Remote command ended without an exit status"

    error = f"Remote command exited with code {exit_status}"
    if stderr and stderr.strip():
        error += f": {stderr.strip()}"
    return None, error


class BigIPCollector:
    """Collects the last bandwidth utilization log line from a BIG-IP via SSH"""

    def __init__(self, host, username, password=None, key_path=None,
                 connect_timeout=DEFAULT_CONNECT_TIMEOUT,
                 session_timeout=DEFAULT_SESSION_TIMEOUT,
                 keepalive_interval=DEFAULT_KEEPALIVE_INTERVAL):
        self.host = host
        self.username = username
        self.password = password
        self.key_path = key_path
        self.connect_timeout = connect_timeout
        self.session_timeout = session_timeout
        self.keepalive_interval = keepalive_interval

    def _auth_kwargs(self):
        """Key file when it exists, password otherwise"""
        if self.key_path and os.path.isfile(self.key_path):
            return {"key_filename": self.key_path}
        if self.key_path:
            logger.debug(f"SSH key {self.key_path} not found, falling back to password")
        if self.password:
            return {"password": self.password}
        return {}

    def fetch_log_line(self, command=BANDWIDTH_LOG_COMMAND):
        """
        Run the retrieval command once

        Returns:
            dict: {
                "reachable": bool,
                "output": str or None,
                "exit_status": int or None,
                "error": str (if any)
            }
        """
        result = {
            "reachable": False,
            "output": None,
            "exit_status": None,
            "error": None
        }

        ssh = paramiko.SSHClient()
        ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            ssh.connect(
                self.host,
                username=self.username,
                timeout=self.connect_timeout,
                banner_timeout=self.connect_timeout,
                auth_timeout=self.connect_timeout,
                look_for_keys=False,
                allow_agent=False,
                **self._auth_kwargs()
            )
            result["reachable"] = True

            transport = ssh.get_transport()
            if transport is not None:
                transport.set_keepalive(self.keepalive_interval)

            logger.debug(f"Running on {self.host}: {command}")
            _, stdout, stderr = ssh.exec_command(command, timeout=self.session_timeout)

            out = stdout.read().decode("utf-8", errors="ignore")
            err = stderr.read().decode("utf-8", errors="ignore")
            exit_status = stdout.channel.recv_exit_status()
            result["exit_status"] = exit_status

            output, error = interpret_exit_status(exit_status, out, err)
            result["output"] = output
            result["error"] = error

        except paramiko.AuthenticationException as e:
            result["error"] = f"SSH authentication failed: {e}"
        except (paramiko.SSHException, OSError) as e:
            # socket.timeout is an OSError
            stage = "executing command" if result["reachable"] else "connecting"
            result["error"] = f"SSH error while {stage}: {str(e) or type(e).__name__}"
        finally:
            ssh.close()

        logger.debug(f"Command result: {result['output']!r} "
                     f"(exit status {result['exit_status']}, error {result['error']!r})")
        return result
