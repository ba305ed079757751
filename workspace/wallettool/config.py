"""
Configuration management for WalletTool
"""
import os
import string
from dataclasses import dataclass
from typing import Optional

from wallettool.errors import InputError


@dataclass
class Config:
    """Configuration settings for a WalletTool run"""
    wallet_path: str = ''
    db_type: Optional[str] = None
    hex_key: Optional[str] = None
    remove_pass: bool = False
    dump_keys: bool = False
    dest_dir: Optional[str] = None
    report_format: Optional[str] = None
    output_dir: Optional[str] = None
    verbose: bool = False
    progress: bool = False

    # Record tags
    mkey_tag = b'mkey'
    ckey_tag = b'ckey'

    # Master key: 48 bytes starting 72 bytes before the tag
    mkey_offset = 72
    mkey_length = 48

    # Check key: 123 byte window starting 52 bytes before the tag,
    # of which the first 48 bytes are reported
    ckey_offset = 52
    ckey_window = 123
    ckey_length = 48
    ckey_skip = 3

    # Read size for the streaming tag search
    chunk_size: int = 1024 * 1024

    db_types = ('BerkelyDB', 'SQLite')
    report_formats = ('html', 'json', 'markdown')

    # WDK is 5 bytes written as hex
    hex_key_length = 10

    def validate(self):
        """Check the option combination, raising InputError on misuse"""
        if not self.wallet_path:
            raise InputError("Wallet path must be specified")

        if self.db_type is not None and self.db_type not in self.db_types:
            raise InputError("Invalid database type. Must be 'BerkelyDB' or 'SQLite'")

        if self.hex_key is not None and not is_valid_hex_key(self.hex_key, self.hex_key_length):
            raise InputError("Invalid KEY format. Must be a 5-byte hexadecimal string")

        if self.dump_keys:
            if self.db_type or self.hex_key or self.remove_pass:
                raise InputError("--dump-all-keys can only be used with --wallet")
            if self.dest_dir:
                raise InputError("--dest-dir can only be used with --remove-pass")
        elif self.remove_pass:
            if not self.db_type or not self.hex_key:
                raise InputError("--remove-pass requires --wallet, --type, and --KEY options")
            if self.report_format or self.output_dir or self.progress:
                raise InputError("--report, --output and --progress can only be used with --dump-all-keys")
        else:
            raise InputError("Either --dump-all-keys or --remove-pass must be specified")

        if self.report_format is not None and self.report_format not in self.report_formats:
            raise InputError(f"Unsupported report format: {self.report_format}")

    @property
    def wallet_name(self) -> str:
        return os.path.basename(self.wallet_path)


def is_valid_hex_key(value: str, length: int = Config.hex_key_length) -> bool:
    """True when value is exactly `length` hex digits, either case"""
    if len(value) != length:
        return False
    return all(c in string.hexdigits for c in value)
