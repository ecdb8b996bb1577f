import argparse
import json
import os
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

from superast.config_manager import ConfigManager
from superast.converter import SuperASTConverter
from superast.serializer import dumps


class FolderConverter:
    """
    Converts every .go file under a folder into super-AST JSON.

    In check mode nothing is written: each result is compared with the JSON
    already stored next to the expected output path (golden files).
    """

    def __init__(self, input_dir: str, output_dir: str, converter: SuperASTConverter,
                 pretty: bool = True, check: bool = False):
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.converter = converter
        self.pretty = pretty
        self.check = check

        if not check:
            self.output_dir.mkdir(parents=True, exist_ok=True)

        self.stats = {
            "total_files": 0,
            "converted": 0,
            "syntax_errors": 0,
            "rejected": 0,
            "mismatches": 0,
        }
        self.failures: List[Dict] = []

    def output_path(self, go_file: Path) -> Path:
        rel = go_file.relative_to(self.input_dir)
        return self.output_dir / rel.with_suffix(".json")

    def process_single_file(self, go_file: Path):
        with open(go_file, 'r', encoding='utf-8') as f:
            code = f.read()

        result = self.converter.get_superast(code)
        if result["status"] != "success":
            key = "syntax_errors" if result["stage"] == "parse" else "rejected"
            self.stats[key] += 1
            self.failures.append({"file": str(go_file), "reason": result["message"]})
            return

        self.stats["converted"] += 1
        out_path = self.output_path(go_file)
        if self.check:
            expected = None
            if out_path.exists():
                with open(out_path, 'r', encoding='utf-8') as f:
                    expected = json.load(f)
            if expected != result["ast"]:
                self.stats["mismatches"] += 1
                self.failures.append({"file": str(go_file), "reason": f"output differs from {out_path}"})
            return

        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, 'w', encoding='utf-8') as f:
            f.write(dumps(result["ast"], self.pretty) + "\n")

    def run(self):
        files = sorted(self.input_dir.rglob("*.go"))
        self.stats["total_files"] = len(files)

        if not files:
            print(f"❌ No .go files found in {self.input_dir}")
            return

        print(f"🚀 Found {len(files)} Go files, converting...")
        for go_file in tqdm(files, desc="Converting"):
            self.process_single_file(go_file)

        self.print_report()

    def print_report(self, max_failures: int = 10):
        total = self.stats["total_files"]
        converted = self.stats["converted"]
        rate = (converted / total * 100) if total > 0 else 0

        print("\n" + "=" * 50)
        print("📊 super-AST conversion report")
        print("=" * 50)
        print(f"📂 Go files:       {total}")
        print(f"✅ Converted:      {converted} ({rate:.2f}%)")
        print(f"❌ Syntax errors:  {self.stats['syntax_errors']}")
        print(f"⛔ Rejected:       {self.stats['rejected']}")
        if self.check:
            print(f"🔍 Mismatches:     {self.stats['mismatches']}")
        for failure in self.failures[:max_failures]:
            print(f"   - {failure['file']}: {failure['reason']}")
        print("-" * 50)
        if not self.check:
            print(f"📁 JSON written to: {self.output_dir.absolute()}")
        print("=" * 50)

    @property
    def ok(self) -> bool:
        return not self.failures


def parse_args():
    parser = argparse.ArgumentParser(description="Batch Go -> super-AST JSON converter")
    parser.add_argument("-i", "--input_dir", type=str, required=True,
                        help="folder searched recursively for .go files")
    parser.add_argument("-o", "--output_dir", type=str, default=None,
                        help="where the .json files go (default: next to the sources)")
    parser.add_argument("-c", "--config", type=str, default=None,
                        help="YAML config file with a 'superast' section (default: config.yaml when present)")
    parser.add_argument("--compact", action="store_true",
                        help="write compact JSON instead of indented JSON")
    parser.add_argument("--check", action="store_true",
                        help="compare against existing JSON files instead of writing them")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()

    if not os.path.isdir(args.input_dir):
        print(f"❌ Error: input folder '{args.input_dir}' does not exist")
        exit(1)

    config = ConfigManager(args.config)
    runner = FolderConverter(
        input_dir=args.input_dir,
        output_dir=args.output_dir or args.input_dir,
        converter=SuperASTConverter.from_config(config),
        pretty=not args.compact,
        check=args.check,
    )
    runner.run()
    exit(0 if runner.ok else 1)
