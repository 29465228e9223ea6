from importlib import import_module

import pytest


@pytest.mark.parametrize(
    "module",
    [
        "bpscan.cli",
        "bpscan.headless",
        "bpscan.engine.extract",
        "bpscan.engine.model",
        "bpscan.ocr.layout",
        "bpscan.ocr.vitals_bounds",
        "bpscan.report.txt_writer",
        "bpscan.fs.exports",
        "bpscan.logs.rotating",
    ],
)
def test_imports(module: str) -> None:
    import_module(module)


def test_ocr_package_lists_modules() -> None:
    ocr = import_module("bpscan.ocr")
    for name in ocr.__all__:
        import_module(f"bpscan.ocr.{name}")
