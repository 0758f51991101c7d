"""
Output Manager - Per-run output folders and retention cleanup.

Each job run gets a folder under the base output directory named
YYYYMMDD_HHMMSS_{resource}_{operation}, holding:
  - output.json:       the flattened output collection
  - run_results.json:  run metadata, counts and the error, if any

Folders older than OUTPUT_RETENTION_DAYS are removed at the start of a run.
Set retention_days=0 to keep everything.
"""

import os
import re
import shutil
from datetime import datetime, timedelta

FOLDER_PATTERN = re.compile(r'^(\d{8})_(\d{6})_.*$')


class OutputManager:
    """Manages run folders with timestamping and a retention policy."""

    def __init__(self, base_dir: str, retention_days: int = 30):
        self.base_dir = base_dir
        self.retention_days = retention_days
        self.current_dir = None

    def create_run_dir(self, label: str) -> str:
        """Create the folder for the current run and return its path."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe_label = "".join(c if c.isalnum() or c in '-_' else '_' for c in label)
        self.current_dir = os.path.join(self.base_dir, f"{timestamp}_{safe_label}")
        os.makedirs(self.current_dir, exist_ok=True)
        return self.current_dir

    def cleanup_old_folders(self, debug: bool = False) -> int:
        """Remove run folders older than retention_days. Returns the count."""
        if self.retention_days <= 0 or not os.path.exists(self.base_dir):
            return 0

        deleted_count = 0
        cutoff_date = datetime.now() - timedelta(days=self.retention_days)

        for folder_name in os.listdir(self.base_dir):
            folder_path = os.path.join(self.base_dir, folder_name)
            match = FOLDER_PATTERN.match(folder_name)
            if not match or not os.path.isdir(folder_path):
                continue

            try:
                folder_datetime = datetime.strptime(
                    f"{match.group(1)}_{match.group(2)}", "%Y%m%d_%H%M%S"
                )
                if folder_datetime < cutoff_date:
                    shutil.rmtree(folder_path)
                    deleted_count += 1
                    if debug:
                        print(f"  Deleted old output folder: {folder_name}")
            except (ValueError, OSError) as e:
                if debug:
                    print(f"  Warning: Could not process folder {folder_name}: {e}")

        return deleted_count

    def get_output_path(self, filename: str) -> str:
        """Path of filename inside the current run folder.

        Raises:
            RuntimeError: If create_run_dir() has not been called yet.
        """
        if not self.current_dir:
            raise RuntimeError("Output directory not created. Call create_run_dir() first.")
        return os.path.join(self.current_dir, filename)
