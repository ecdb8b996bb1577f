import pytest

from superast.converter import SuperASTConverter
from superast.errors import EntryPackageError, ImportNotAllowedError, SuperASTError
from superast.sema.validator import EntryValidator

converter = SuperASTConverter()


def test_package_must_be_main():
    with pytest.raises(EntryPackageError) as err:
        converter.convert('package lib\n\nfunc main() {\n\tprintln("x")\n}\n')
    assert 'Package name is not "main": "lib"' in str(err.value)
    assert err.value.line == 1


def test_import_must_be_allowed():
    code = 'package main\n\nimport (\n\t"fmt"\n\t"os"\n)\n\nfunc main() {}\n'
    with pytest.raises(ImportNotAllowedError) as err:
        converter.convert(code)
    assert 'Import path not allowed: "os"' in str(err.value)
    assert err.value.line == 5


def test_allowed_imports_pass():
    out = converter.convert('package main\n\nimport (\n\t"fmt"\n\t"log"\n)\n')
    assert out == '{"id":0,"statements":[]}'


def test_custom_gate():
    validator = EntryValidator(entry_name="app", allowed_imports=["strings"])
    validator.validate({"kind": "File", "package": "app", "line": 1, "column": 1,
                        "imports": [{"kind": "ImportSpec", "path": "strings", "line": 3, "column": 8}]})
    with pytest.raises(SuperASTError):
        validator.validate({"kind": "File", "package": "main", "line": 1, "column": 1, "imports": []})


def test_status_dict_reports_rejection():
    result = converter.get_superast('package main\n\nimport "net/http"\n')
    assert result["status"] == "error"
    assert result["stage"] == "normalize"
    assert "net/http" in result["message"]


def test_status_dict_reports_syntax_error():
    result = converter.get_superast("package main\n\nfunc main( {\n}\n")
    assert result["status"] == "error"
    assert result["stage"] == "parse"
    assert result["line"] == 3
