"""
Output rendering for WalletTool: console lines and report files
"""
import binascii
import json
from datetime import datetime
from pathlib import Path
from typing import List

from jinja2 import Template

NO_MASTER_KEY = "There is no Master Key in the file"
DEFAULT_OUTPUT_DIR = "./wallettool_reports"


def to_hex(data: bytes) -> str:
    """Lowercase hex, two digits per byte, in buffer order"""
    return binascii.hexlify(data).decode('ascii')


def format_dump(result) -> List[str]:
    """Console lines for a key dump, in the order they are printed"""
    lines = []
    if result.has_master_key:
        lines.append(f"Mkey_encrypted: {result.master_key.hex}")
        lines.append("")
    else:
        lines.append(NO_MASTER_KEY)

    for record in result.check_keys:
        lines.append(f"encrypted ckey: {record.hex}")
    return lines


class ReportGenerator:
    """Generates report files from a key dump"""

    def __init__(self, config):
        self.config = config
        self.output_dir = config.output_dir or DEFAULT_OUTPUT_DIR

    def generate_report(self, result) -> str:
        """Write a report in the configured format and return its path"""

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_name = f"wallettool_report_{timestamp}"
        Path(self.output_dir).mkdir(parents=True, exist_ok=True)

        if self.config.report_format == 'html':
            return self._generate_html_report(result, report_name)
        elif self.config.report_format == 'json':
            return self._generate_json_report(result, report_name)
        elif self.config.report_format == 'markdown':
            return self._generate_markdown_report(result, report_name)
        else:
            raise ValueError(f"Unsupported report format: {self.config.report_format}")

    def _generate_html_report(self, result, report_name: str) -> str:
        """Generate HTML report"""

        html_template = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>WalletTool Report</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; }
        .header { background: #2c3e50; color: white; padding: 20px; border-radius: 5px; }
        .summary { background: #ecf0f1; padding: 15px; border-radius: 5px; margin: 20px 0; }
        .key { font-family: monospace; word-break: break-all; }
        table { border-collapse: collapse; }
        td, th { border: 1px solid #bdc3c7; padding: 6px 10px; text-align: left; }
    </style>
</head>
<body>
    <div class="header">
        <h1>🔑 WalletTool Key Dump</h1>
        <p>Generated: {{ timestamp }}</p>
    </div>

    <div class="summary">
        <h2>📊 Summary</h2>
        <ul>
            <li><strong>Wallet:</strong> {{ result.wallet_path }}</li>
            <li><strong>Bytes Scanned:</strong> {{ result.stats.total_bytes_scanned }}</li>
            <li><strong>Master Key:</strong> {{ "found" if result.has_master_key else "not found" }}</li>
            <li><strong>Encrypted Keys:</strong> {{ result.check_keys | length }}</li>
        </ul>
    </div>

    <h2>Master Key</h2>
    {% if result.master_key %}
    <p>Tag offset {{ result.master_key.tag_offset }}</p>
    <p class="key">{{ result.master_key.hex }}</p>
    {% else %}
    <p>{{ no_master_key }}</p>
    {% endif %}

    <h2>Encrypted Keys</h2>
    <table>
        <tr><th>#</th><th>Tag offset</th><th>Key</th></tr>
        {% for record in result.check_keys %}
        <tr><td>{{ loop.index }}</td><td>{{ record.tag_offset }}</td><td class="key">{{ record.hex }}</td></tr>
        {% endfor %}
    </table>
</body>
</html>
        """

        template = Template(html_template)
        html_content = template.render(
            timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            result=result,
            no_master_key=NO_MASTER_KEY,
        )

        report_path = Path(self.output_dir) / f"{report_name}.html"
        report_path.write_text(html_content, encoding='utf-8')

        return str(report_path)

    def _generate_json_report(self, result, report_name: str) -> str:
        """Generate JSON report"""

        def record_dict(record):
            return {
                'tag_offset': record.tag_offset,
                'window_offset': record.window_offset,
                'hex': record.hex,
            }

        report_data = {
            'report_info': {
                'generated_at': datetime.now().isoformat(),
                'wallet_path': result.wallet_path,
                'scan_time': result.scan_time,
            },
            'master_key': record_dict(result.master_key) if result.master_key else None,
            'check_keys': [record_dict(r) for r in result.check_keys],
            'stats': result.stats.to_dict(),
        }

        report_path = Path(self.output_dir) / f"{report_name}.json"
        report_path.write_text(json.dumps(report_data, indent=2), encoding='utf-8')

        return str(report_path)

    def _generate_markdown_report(self, result, report_name: str) -> str:
        """Generate Markdown report"""

        md_content = f"""# 🔑 WalletTool Key Dump

**Generated:** {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}
**Wallet:** {result.wallet_path}

## 📊 Summary

- **Bytes Scanned:** {result.stats.total_bytes_scanned}
- **Master Key:** {"found" if result.has_master_key else "not found"}
- **Encrypted Keys:** {len(result.check_keys)}

## Master Key

"""
        if result.master_key:
            md_content += f"Tag offset {result.master_key.tag_offset}  \n`{result.master_key.hex}`\n\n"
        else:
            md_content += f"{NO_MASTER_KEY}\n\n"

        md_content += "## Encrypted Keys\n\n"
        for i, record in enumerate(result.check_keys, 1):
            md_content += f"{i}. offset {record.tag_offset}: `{record.hex}`\n"

        report_path = Path(self.output_dir) / f"{report_name}.md"
        report_path.write_text(md_content, encoding='utf-8')

        return str(report_path)
