"""
Utility functions for WalletTool
"""


def format_byte_count(count: int) -> str:
    """Byte count in binary units, exact below 1 KiB"""
    if count < 1024:
        return f"{count} B"
    size = float(count)
    for unit in ('KiB', 'MiB', 'GiB'):
        size /= 1024.0
        if size < 1024.0:
            return f"{size:.1f} {unit}"
    return f"{size / 1024.0:.1f} TiB"


def format_scan_summary(stats) -> str:
    """One line describing what each scan pass read and skipped"""
    windows = stats.truncated_windows
    return (f"mkey pass read {format_byte_count(stats.bytes_scanned['mkey'])}, "
            f"ckey pass read {format_byte_count(stats.bytes_scanned['ckey'])}, "
            f"{windows} truncated window{'' if windows == 1 else 's'} skipped")
