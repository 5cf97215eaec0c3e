import json
import os
from datetime import datetime, timezone

class JSONLogger:
    """
    Appends JSON lines under `output_directory`. With `dated` the main log is
    <prefix><YYYY-MM-DD>.jsonl (UTC), otherwise a fixed <prefix>.jsonl.
    """

    def __init__(self, output_directory="logs/", log_file_prefix="tmvm_", dated=True):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        self.dated = dated
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._path(f"{log_file_prefix}{self.today if dated else ''}.jsonl")

    def _path(self, filename):
        return os.path.join(self.output_directory, filename)

    def _append(self, path, entries):
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        self._append(self.current_log, [entry])

    def log_batch(self, entries: list):
        """Append several entries to the main log in one write."""
        self._append(self.current_log, entries)

    def log_result(self, program: str, tape_contents: str, result):
        """Log a finished run, routing it to the accepted or rejected log as well."""
        entry = {
            "program": program,
            "input": tape_contents,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **result.to_dict()
        }
        self.log(entry)
        if result.accepted:
            self.log_accepted([entry])
        else:
            self.log_rejected([entry])
        return entry

    def log_accepted(self, entries: list):
        """Log runs that halted in the accept state."""
        self._append(self._path(f"accepted_{self.today}.jsonl"), entries)

    def log_rejected(self, entries: list):
        """Log runs that halted in the reject state."""
        self._append(self._path(f"rejected_{self.today}.jsonl"), entries)
