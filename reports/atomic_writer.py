"""
Atomic file writer - ensures no partial or corrupted analysis output.
Implements temp-write → fsync → rename pattern for durability.
"""

import os
import json
import time
import tempfile
from pathlib import Path
from typing import Dict, Any


class AtomicWriteError(Exception):
    """Raised when atomic write operations fail."""
    pass


def write_text_atomic(content: str, output_path: Path) -> Dict[str, Any]:
    """
    Write text content atomically to prevent partial files.

    Args:
        content: Text to write
        output_path: Final path for the file

    Returns:
        Dictionary with write results

    Raises:
        AtomicWriteError: If the file cannot be written
    """
    start_time = time.time()
    output_path = Path(output_path)
    temp_path = None

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # Temp file in the same directory so the rename stays on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            suffix='.tmp',
            prefix=f'{output_path.stem}_',
            dir=output_path.parent
        )
        temp_path = Path(temp_path_str)

        with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        # os.replace overwrites the target atomically on POSIX and Windows
        os.replace(temp_path, output_path)

    except OSError as e:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise AtomicWriteError(f"Failed to write {output_path}: {e}")

    return {
        'status': 'completed',
        'output_path': str(output_path),
        'bytes_written': len(content.encode('utf-8')),
        'duration_seconds': time.time() - start_time
    }


def write_json_atomic(payload: Dict[str, Any], output_path: Path) -> Dict[str, Any]:
    """
    Serialize a dictionary to JSON and write it atomically.

    Raises:
        AtomicWriteError: If serialization or the write fails
    """
    try:
        # Serialize first so a bad payload never touches the disk
        content = json.dumps(payload, indent=2, default=str, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise AtomicWriteError(f"JSON serialization failed: {e}")

    return write_text_atomic(content, output_path)
