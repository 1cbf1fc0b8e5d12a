"""
DataMashup Inspector
Summarize a parsed DataMashup without changing it.
"""
import re
from pathlib import Path
from ..packager.spreadsheet import SpreadsheetPackage
from ..utils.checksum import calculate_bytes_checksum
from ..utils.logger import logger

PERMISSION_FLAG = re.compile(r'<(CanEvaluateFuturePackages|FirewallEnabled)>\s*(\w+)\s*<')


class Inspector:
    def inspect(self, container, print_report: bool = True) -> dict:
        """Collect field sizes, entry listings and checksums of a container"""
        flags = {name: value == 'true' for name, value in PERMISSION_FLAG.findall(container.permissions)}
        formula = container.get_formula()

        info = {
            'version': container.version,
            'size': len(container.to_bytes()),
            'package_parts': [(e.path, e.size) for e in container.package_parts],
            'formula_path': getattr(container.find_formula_entry(), 'path', None),
            'formula_lines': len(formula.splitlines()) if formula else 0,
            'firewall_enabled': flags.get('FirewallEnabled'),
            'can_evaluate_future_packages': flags.get('CanEvaluateFuturePackages'),
            'permissions_checksum': calculate_bytes_checksum(container.permissions),
            'metadata_version': container.metadata.version,
            'metadata_content': [(e.path, e.size) for e in container.metadata.content],
            'permission_bindings_size': len(container.permission_bindings),
            'permission_bindings_checksum': calculate_bytes_checksum(container.permission_bindings),
        }

        if print_report:
            self._print(info)
        return info

    def inspect_package(self, package_path: str, print_report: bool = True) -> dict:
        path = Path(package_path)
        if not path.exists():
            raise ValueError(f"Package not found: {package_path}")

        package = SpreadsheetPackage.from_file(str(path))
        part = package.datamashup
        if part is None:
            logger.info(f"{path.name}: no Power Query")
            return {'package_path': str(path), 'datamashup': None}
        if part.error:
            logger.warning(f"{path.name}: DataMashup present but unreadable ({part.error.value})")
            return {'package_path': str(path), 'datamashup': part.entry.path, 'error': part.error.value}

        info = self.inspect(part.container, print_report=print_report)
        info.update({'package_path': str(path), 'datamashup': part.entry.path, 'encoding': part.encoding})
        return info

    def _print(self, info: dict):
        def fmt_size(b):
            if b >= 1024 * 1024:
                return f"{b/1024/1024:.2f} MB"
            if b >= 1024:
                return f"{b/1024:.1f} KB"
            return f"{b} B"

        print(f"\n{'='*50}")
        print(f"  DataMashup Inspection")
        print(f"{'='*50}")
        print(f"  Version:     {info['version']}")
        print(f"  Size:        {fmt_size(info['size'])}")
        print(f"  Formula:     {info['formula_path'] or 'none'} ({info['formula_lines']} lines)")
        print()
        print(f"  Package parts:")
        for path, size in info['package_parts']:
            print(f"    {path:<36} {fmt_size(size)}")
        print()
        print(f"  Firewall:    {info['firewall_enabled']}")
        print(f"  Future pkgs: {info['can_evaluate_future_packages']}")
        print(f"  Metadata:    v{info['metadata_version']}, {len(info['metadata_content'])} entries")
        print(f"  Bindings:    {fmt_size(info['permission_bindings_size'])}")
        print(f"{'='*50}\n")


__all__ = ["Inspector"]
