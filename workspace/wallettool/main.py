#!/usr/bin/env python3
"""
WalletTool - Main Entry Point
Dumps the encrypted master key and encrypted keys of a wallet.dat container,
or writes the output wallet for password removal.
"""

import sys

import click
from colorama import init, Fore, Style

from wallettool import __version__
from wallettool.config import Config
from wallettool.errors import WalletToolError
from wallettool.materializer import materialize
from wallettool.reporter import ReportGenerator, format_dump
from wallettool.scan_history import MetricsCollector
from wallettool.scanner import RecordScanner
from wallettool.utils import format_scan_summary

# Initialize colorama for cross-platform colored output
init()


def info(message: str, verbose: bool):
    """Diagnostics go to stderr so stdout carries only key lines"""
    if verbose:
        click.echo(message, err=True)


class WalletCommand(click.Command):
    """Reports command line mistakes as a single Error line"""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            fail(e.format_message())


@click.command(cls=WalletCommand, context_settings={'help_option_names': ['--help']})
@click.option('--wallet', 'wallet_path',
              help='Specify wallet.dat file path',
              type=str)
@click.option('--type', 'db_type',
              help='Specify database type',
              type=click.Choice(Config.db_types))
@click.option('--KEY', 'hex_key',
              help='Specify 5-byte hexadecimal key',
              type=str)
@click.option('--remove-pass', 'remove_pass',
              is_flag=True,
              help='Remove wallet password')
@click.option('--dump-all-keys', 'dump_keys',
              is_flag=True,
              help='Dump all keys from wallet')
@click.option('--dest-dir', 'dest_dir',
              help="[--remove-pass] Directory for the output wallet (default: Desktop)",
              type=str)
@click.option('--report', 'report_format',
              type=click.Choice(Config.report_formats, case_sensitive=False),
              help="[--dump-all-keys] Also write a key dump report in this format")
@click.option('--output', '-o', 'output_dir',
              help="[--dump-all-keys] Output directory for reports (default: ./wallettool_reports)",
              type=str)
@click.option('--progress',
              is_flag=True,
              help="[--dump-all-keys] Show a progress bar while scanning")
@click.option('--verbose', '-v',
              is_flag=True,
              help='Verbose output')
@click.pass_context
def main(ctx, wallet_path, db_type, hex_key, remove_pass, dump_keys, dest_dir,
         report_format, output_dir, progress, verbose):
    """
    Wallet Tool.

    \b
    Option 1: Password Removal
      --wallet <path> --type <BerkelyDB|SQLite> --KEY <5-byte-hex> --remove-pass
    Option 2: Key Dumping
      --wallet <path> --dump-all-keys
    """
    if not any(ctx.params.values()):
        fail("No options provided. Use --help for usage information.")

    config = Config(
        wallet_path=wallet_path or '',
        db_type=db_type,
        hex_key=hex_key,
        remove_pass=remove_pass,
        dump_keys=dump_keys,
        dest_dir=dest_dir,
        report_format=report_format.lower() if report_format else None,
        output_dir=output_dir,
        verbose=verbose,
        progress=progress
    )

    try:
        config.validate()
        if config.dump_keys:
            dump_all_keys(config)
        else:
            remove_password(config)
    except KeyboardInterrupt:
        click.echo(f"\n{Fore.YELLOW}⏹️  Interrupted by user.{Style.RESET_ALL}", err=True)
        sys.exit(1)
    except (WalletToolError, OSError) as e:
        fail(str(e))


def dump_all_keys(config: Config):
    info(f"{Fore.CYAN}🔍 WalletTool {__version__}{Style.RESET_ALL}", config.verbose)
    info(f"{Fore.GREEN}🚀 Scanning: {config.wallet_path}{Style.RESET_ALL}", config.verbose)

    metrics = MetricsCollector()
    scanner = RecordScanner(config, metrics=metrics)
    result = scanner.dump()

    for line in format_dump(result):
        click.echo(line)

    info(f"{Fore.CYAN}📈 {len(result.check_keys)} encrypted keys; "
         f"{format_scan_summary(result.stats)}{Style.RESET_ALL}", config.verbose)

    if config.report_format:
        report_path = ReportGenerator(config).generate_report(result)
        info(f"{Fore.GREEN}📊 Report saved to: {report_path}{Style.RESET_ALL}", config.verbose)


def remove_password(config: Config):
    info(f"{Fore.YELLOW}⚠️  No decryption is performed; the wallet is copied unchanged.{Style.RESET_ALL}",
         config.verbose)
    dest_path = materialize(config.wallet_path, config.dest_dir)
    click.echo(f"The new wallet.dat file with the password removed was saved to: {dest_path}")


def fail(message: str):
    click.echo(f"{Fore.RED}Error: {message}{Style.RESET_ALL}", err=True)
    sys.exit(1)


if __name__ == "__main__":
    main()
