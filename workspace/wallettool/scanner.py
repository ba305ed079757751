"""
Core record scanning for WalletTool

A wallet container is treated as an opaque byte stream. Key records are found
by their 4-byte ASCII tag at any byte offset, and a fixed-size window is read
at a tag-relative offset.
"""
import os
import time
from typing import BinaryIO, Callable, Iterator, Optional

from tqdm import tqdm

from wallettool.config import Config
from wallettool.errors import InputError
from wallettool.models import DumpResult, KeyRecord, ScanStats
from wallettool.scan_history import MetricsCollector, ScanCache


def iter_tag_offsets(stream: BinaryIO, tag: bytes, skip: int = 0,
                     limit: Optional[int] = None,
                     chunk_size: int = Config.chunk_size,
                     on_read: Optional[Callable[[int], None]] = None) -> Iterator[int]:
    """
    Yield every absolute offset where `tag` starts, in ascending order.

    Every byte offset is a candidate. After a match at `pos` the next
    candidate is `pos + 1 + skip`. The stream is read in chunks that overlap
    by len(tag) - 1 bytes, and only the first `limit` bytes are considered.
    The consumer may seek the stream between items.
    """
    overlap = len(tag) - 1
    buf = b''
    base = 0          # absolute offset of buf[0]
    read_pos = 0      # absolute offset of the next unread byte
    next_candidate = 0

    while limit is None or read_pos < limit:
        size = chunk_size if limit is None else min(chunk_size, limit - read_pos)
        stream.seek(read_pos)
        chunk = stream.read(size)
        if not chunk:
            break
        read_pos += len(chunk)
        if on_read:
            on_read(len(chunk))

        buf += chunk
        while True:
            idx = buf.find(tag, max(next_candidate - base, 0))
            if idx < 0:
                break
            pos = base + idx
            next_candidate = pos + 1 + skip
            yield pos

        keep = max(len(buf) - overlap, 0)
        buf = buf[keep:]
        base += keep


def read_window(stream: BinaryIO, offset: int, length: int, limit: int) -> Optional[bytes]:
    """Exactly `length` bytes at `offset`, or None if the window leaves [0, limit)"""
    if offset < 0 or offset + length > limit:
        return None
    stream.seek(offset)
    data = stream.read(length)
    if len(data) != length:
        return None
    return data


def stream_size(stream: BinaryIO) -> int:
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


class RecordScanner:
    """Finds the master key and the encrypted keys in a wallet container"""

    def __init__(self, config: Config, stats: ScanStats = None,
                 cache: ScanCache = None, metrics: MetricsCollector = None):
        self.config = config
        # accumulates over every pass run by this scanner
        self.stats = stats or ScanStats()
        self.cache = cache
        self.metrics = metrics or MetricsCollector()

    def find_master_key(self, stream: BinaryIO, limit: Optional[int] = None,
                        on_read: Optional[Callable[[int], None]] = None,
                        stats: ScanStats = None) -> Optional[KeyRecord]:
        """First mkey record with a complete window, or None"""
        stats = stats or self.stats
        if limit is None:
            limit = stream_size(stream)

        tag = self.config.mkey_tag
        for pos in iter_tag_offsets(stream, tag, limit=limit,
                                    chunk_size=self.config.chunk_size,
                                    on_read=self._counting(stats, 'mkey', on_read)):
            stats.tags_matched['mkey'] += 1
            offset = pos - self.config.mkey_offset
            data = read_window(stream, offset, self.config.mkey_length, limit)
            if data is None:
                stats.truncated_windows += 1
                continue
            stats.records_emitted['mkey'] += 1
            return KeyRecord('mkey', pos, offset, data)
        return None

    def iter_check_keys(self, stream: BinaryIO, limit: Optional[int] = None,
                        on_read: Optional[Callable[[int], None]] = None,
                        stats: ScanStats = None) -> Iterator[KeyRecord]:
        """Every ckey record with a complete window, in file order"""
        stats = stats or self.stats
        if limit is None:
            limit = stream_size(stream)

        tag = self.config.ckey_tag
        for pos in iter_tag_offsets(stream, tag, skip=self.config.ckey_skip, limit=limit,
                                    chunk_size=self.config.chunk_size,
                                    on_read=self._counting(stats, 'ckey', on_read)):
            stats.tags_matched['ckey'] += 1
            offset = pos - self.config.ckey_offset
            window = read_window(stream, offset, self.config.ckey_window, limit)
            if window is None:
                stats.truncated_windows += 1
                continue
            stats.records_emitted['ckey'] += 1
            yield KeyRecord('ckey', pos, offset, window[:self.config.ckey_length])

    def dump(self, wallet_path: Optional[str] = None) -> DumpResult:
        """Run the master key pass, then the encrypted key pass, over one file"""
        path = wallet_path or self.config.wallet_path
        if not os.path.isfile(path):
            raise InputError(f"Can't open file {path}")

        self.metrics.increment('scans')
        cache_key = self._cache_key(path)
        if self.cache is not None:
            cached = self.cache.retrieve(cache_key)
            if cached is not None:
                self.metrics.increment('cache_hits')
                return cached

        stats = ScanStats()
        start = time.time()

        with self._open(path) as stream:
            size = stream_size(stream)
            with tqdm(total=size, unit='B', unit_scale=True, desc="Master key",
                      disable=not self.config.progress) as pbar:
                master_key = self.find_master_key(stream, size, on_read=pbar.update, stats=stats)

        if master_key is None:
            self.metrics.increment('mkey_missing')
        else:
            self.metrics.increment('mkey_found')

        with self._open(path) as stream:
            size = stream_size(stream)
            with tqdm(total=size, unit='B', unit_scale=True, desc="Encrypted keys",
                      disable=not self.config.progress) as pbar:
                check_keys = list(self.iter_check_keys(stream, size, on_read=pbar.update,
                                                       stats=stats))
        self.metrics.increment('ckeys_found', len(check_keys))

        stats.elapsed_time = time.time() - start
        self.stats.add(stats)
        result = DumpResult(path, master_key, check_keys, stats)

        if self.cache is not None:
            self.cache.store(cache_key, result)
        return result

    @staticmethod
    def _counting(stats: ScanStats, kind: str, on_read):
        def count(n):
            stats.bytes_scanned[kind] += n
            if on_read:
                on_read(n)
        return count

    @staticmethod
    def _open(path: str) -> BinaryIO:
        try:
            return open(path, 'rb')
        except OSError as e:
            raise InputError(f"Can't open file {path}: {e.strerror}") from e

    @staticmethod
    def _cache_key(path: str) -> tuple:
        st = os.stat(path)
        return (os.path.realpath(path), st.st_size, st.st_mtime_ns)
