"""
Data models for WalletTool
"""
import time
from typing import List, Optional

from wallettool.reporter import to_hex


class KeyRecord:
    """A fixed-size key window extracted next to an mkey/ckey tag"""

    def __init__(self, kind: str, tag_offset: int, window_offset: int, data: bytes):
        self.kind = kind  # mkey or ckey
        self.tag_offset = tag_offset
        self.window_offset = window_offset
        self.data = data

    @property
    def hex(self) -> str:
        return to_hex(self.data)

    def __eq__(self, other):
        if not isinstance(other, KeyRecord):
            return NotImplemented
        return (self.kind, self.tag_offset, self.window_offset, self.data) == \
            (other.kind, other.tag_offset, other.window_offset, other.data)

    def __repr__(self):
        return f"KeyRecord({self.kind!r}, tag_offset={self.tag_offset}, data={self.hex})"


class ScanStats:
    """Counters collected over the two scan passes"""

    def __init__(self):
        self.bytes_scanned = {'mkey': 0, 'ckey': 0}  # per pass
        self.tags_matched = {'mkey': 0, 'ckey': 0}
        self.records_emitted = {'mkey': 0, 'ckey': 0}
        self.truncated_windows = 0
        self.elapsed_time = 0.0

    @property
    def total_bytes_scanned(self) -> int:
        return sum(self.bytes_scanned.values())

    def add(self, other: 'ScanStats'):
        """Fold another run's counters into this one"""
        for kind in ('mkey', 'ckey'):
            self.bytes_scanned[kind] += other.bytes_scanned[kind]
            self.tags_matched[kind] += other.tags_matched[kind]
            self.records_emitted[kind] += other.records_emitted[kind]
        self.truncated_windows += other.truncated_windows
        self.elapsed_time += other.elapsed_time

    def to_dict(self) -> dict:
        return {
            'bytes_scanned': dict(self.bytes_scanned),
            'total_bytes_scanned': self.total_bytes_scanned,
            'tags_matched': dict(self.tags_matched),
            'records_emitted': dict(self.records_emitted),
            'truncated_windows': self.truncated_windows,
            'elapsed_time': self.elapsed_time,
        }


class DumpResult:
    """Everything found in one wallet container"""

    def __init__(self, wallet_path: str, master_key: Optional[KeyRecord] = None,
                 check_keys: List[KeyRecord] = None, stats: ScanStats = None):
        self.wallet_path = wallet_path
        self.master_key = master_key
        self.check_keys = check_keys or []
        self.stats = stats or ScanStats()
        self.scan_time = time.time()

    @property
    def has_master_key(self) -> bool:
        return self.master_key is not None
