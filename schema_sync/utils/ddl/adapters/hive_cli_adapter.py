"""
Hive CLI adapter.

Runs each statement through `hive -e <sql>` in a child process. The child
inherits this process's stdout/stderr so Hive's own output shows up in the
bridge's logs.
"""

import logging
import os
import subprocess
from typing import Dict, List, Optional, Tuple

from .base_adapter import BaseStatementExecutor

logger = logging.getLogger(__name__)


class HiveCLIExecutor(BaseStatementExecutor):
    """Execute DDL with the Hive command line client."""

    def __init__(
        self,
        hive_binary: str = '/usr/local/hive/bin/hive',
        hadoop_home: str = '/usr/local/hadoop',
        hadoop_bin: str = '/usr/local/hadoop/bin',
        timeout: Optional[float] = None,
    ):
        """
        Args:
            hive_binary: Path to the hive executable
            hadoop_home: Value of HADOOP_HOME for the child process
            hadoop_bin: Directory prepended to PATH for the child process
            timeout: Seconds to wait for the child, None waits forever
        """
        self.hive_binary = hive_binary
        self.hadoop_home = hadoop_home
        self.hadoop_bin = hadoop_bin
        self.timeout = timeout

    @property
    def engine_type(self) -> str:
        return 'hive_cli'

    def build_command(self, sql: str) -> List[str]:
        return [self.hive_binary, '-e', sql]

    def build_env(self) -> Dict[str, str]:
        """Inherited environment plus the Hadoop overrides, for the child only."""
        env = dict(os.environ)
        env['HADOOP_HOME'] = self.hadoop_home
        inherited_path = os.environ.get('PATH', '')
        env['PATH'] = f"{self.hadoop_bin}:{inherited_path}" if inherited_path else self.hadoop_bin
        return env

    def execute(self, sql: str) -> Tuple[bool, Optional[str]]:
        try:
            result = subprocess.run(
                self.build_command(sql),
                env=self.build_env(),
                timeout=self.timeout,
                check=False,
                # keep terminal Ctrl-C away from the child; the loop stops between statements
                start_new_session=True,
            )
        except subprocess.TimeoutExpired:
            error_msg = f"failed to execute Hive query: timed out after {self.timeout}s"
            logger.error(f"   {error_msg}")
            return False, error_msg
        except OSError as e:
            error_msg = f"failed to execute Hive query: {e}"
            logger.error(f"   {error_msg}")
            return False, error_msg

        if result.returncode != 0:
            error_msg = f"failed to execute Hive query: exit status {result.returncode}"
            logger.error(f"   {error_msg}")
            return False, error_msg

        logger.info(f"   Executed: {sql[:100]}{'...' if len(sql) > 100 else ''}")
        return True, None
