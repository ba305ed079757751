"""
Writes the output wallet for password removal mode

The wallet content is copied unchanged; no decryption is performed.
"""
import os
import shutil
import sys
from pathlib import Path
from typing import Optional

from wallettool.errors import DestinationError, InputError

OUTPUT_NAME = 'wallet.dat'


def get_desktop_path() -> Path:
    """The current user's Desktop directory"""
    if sys.platform.startswith('win'):
        user_profile = os.environ.get('USERPROFILE')
        if not user_profile:
            raise DestinationError("Cannot determine user profile path")
        return Path(user_profile) / 'Desktop'

    home = os.environ.get('HOME')
    if not home:
        raise DestinationError("Cannot determine home directory")
    return Path(home) / 'Desktop'


def materialize(source: str, dest_dir: Optional[str] = None) -> Path:
    """Copy the wallet byte for byte to <dest_dir or Desktop>/wallet.dat"""
    source_path = Path(source)
    if not source_path.exists():
        raise InputError(f"Source wallet file does not exist: {source}")

    target_dir = Path(dest_dir) if dest_dir else get_desktop_path()
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DestinationError(f"Cannot create destination directory {target_dir}: {e.strerror}") from e

    dest_path = target_dir / OUTPUT_NAME
    if dest_path.exists() and source_path.resolve() == dest_path.resolve():
        raise DestinationError(f"Destination is the source wallet itself: {dest_path}")

    created = False
    try:
        expected = source_path.stat().st_size
        try:
            src = open(source_path, 'rb')
        except OSError as e:
            raise DestinationError("Cannot open source wallet file") from e
        with src:
            try:
                dst = open(dest_path, 'wb')
            except OSError as e:
                raise DestinationError("Cannot create destination file") from e
            created = True
            with dst:
                shutil.copyfileobj(src, dst)
                written = dst.tell()

        if written != expected:
            raise DestinationError("Error occurred while writing destination file")

    except (DestinationError, OSError) as e:
        if created and dest_path.exists():
            dest_path.unlink()
        raise DestinationError(f"Failed to process wallet file: {e}") from e

    return dest_path
