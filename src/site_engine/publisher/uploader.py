"""Bucket uploader — sync the built site to cloud storage with gsutil.

Equivalent of:
    gsutil -m -h 'Cache-Control:private, max-age=0, no-transform' \
        rsync -a public-read -r ./public gs://erock.io

Prerequisites:
    - gsutil installed and authenticated
    - DEPLOY_BUCKET in .env to override the configured bucket
"""

from __future__ import annotations

import subprocess
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from src.common.config import DeploySettings
from src.common.logging import setup_logging

from .models import UploadResult

logger = setup_logging(module_name="publisher.uploader")

# Shell convention for "command not found"
COMMAND_NOT_FOUND = 127


class BucketUploader:
    """Runs ``gsutil rsync`` with a fixed number of retries."""

    def __init__(self, config: Optional[DeploySettings] = None):
        self.config = config or DeploySettings()

    def build_command(self, output_dir: Path) -> list[str]:
        cfg = self.config
        return [
            cfg.gsutil_bin,
            "-m",
            "-h",
            f"Cache-Control:{cfg.cache_control}",
            "rsync",
            "-a",
            cfg.acl,
            "-r",
            str(output_dir),
            cfg.bucket,
        ]

    def upload(self, output_dir: Path) -> UploadResult:
        """Sync output_dir to the bucket.

        Args:
            output_dir: Built site directory

        Returns:
            UploadResult carrying the last exit code

        Raises:
            FileNotFoundError: output_dir does not exist
        """
        if not output_dir.is_dir():
            raise FileNotFoundError(f"Output directory not found: {output_dir}")

        command = self.build_command(output_dir)
        result = UploadResult(success=False, returncode=1, command=command)

        for attempt in range(1, self.config.max_retries + 1):
            result.attempts = attempt
            logger.info("Syncing %s → %s (attempt %d)", output_dir, self.config.bucket, attempt)
            try:
                completed = subprocess.run(command, check=False)
            except FileNotFoundError:
                result.returncode = COMMAND_NOT_FOUND
                result.error = f"{self.config.gsutil_bin} not found"
                logger.error("Upload failed: %s", result.error)
                break

            result.returncode = completed.returncode
            if completed.returncode == 0:
                result.success = True
                result.error = ""
                break

            result.error = f"{self.config.gsutil_bin} exited with {completed.returncode}"
            logger.warning("Upload attempt %d failed: %s", attempt, result.error)
            if attempt < self.config.max_retries:
                time.sleep(self.config.retry_delay_seconds)

        result.finished_at = datetime.now().isoformat()
        if result.success:
            logger.info("Upload complete: %s", self.config.bucket)
        return result
