import json
import shutil
from pathlib import Path

from superast.converter import SuperASTConverter
from tools.convert_folder import FolderConverter

CASES_DIR = Path(__file__).resolve().parent / "cases"

converter = SuperASTConverter()


def make_sources(root: Path):
    (root / "pkg").mkdir(parents=True)
    shutil.copy(CASES_DIR / "hello_world" / "in.go", root / "hello.go")
    (root / "pkg" / "broken.go").write_text("package main\n\nfunc main( {\n", encoding="utf-8")
    (root / "pkg" / "lib.go").write_text("package lib\n", encoding="utf-8")


def test_converts_folder_and_counts_failures(tmp_path):
    src, out = tmp_path / "src", tmp_path / "out"
    make_sources(src)

    runner = FolderConverter(str(src), str(out), converter)
    runner.run()

    assert runner.stats["total_files"] == 3
    assert runner.stats["converted"] == 1
    assert runner.stats["syntax_errors"] == 1
    assert runner.stats["rejected"] == 1
    assert not runner.ok

    expected = json.loads((CASES_DIR / "hello_world" / "out.json").read_text(encoding="utf-8"))
    assert json.loads((out / "hello.json").read_text(encoding="utf-8")) == expected
    assert not (out / "pkg" / "broken.json").exists()


def test_check_mode_compares_with_golden_files(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    shutil.copy(CASES_DIR / "hello_world" / "in.go", src / "hello.go")
    shutil.copy(CASES_DIR / "hello_world" / "out.json", src / "hello.json")
    shutil.copy(CASES_DIR / "declarations" / "in.go", src / "decl.go")
    (src / "decl.json").write_text('{"id": 0, "statements": []}\n', encoding="utf-8")

    runner = FolderConverter(str(src), str(src), converter, check=True)
    runner.run()

    assert runner.stats["converted"] == 2
    assert runner.stats["mismatches"] == 1
    assert runner.failures[0]["file"].endswith("decl.go")
