from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(SCRIPT_PATH), *args],
        capture_output=True,
        text=True,
        check=False,
    )


def _write(root: Path, relative: str, source: str) -> Path:
    file_path = root / relative
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(source, encoding="utf-8")
    return file_path


def test_domain_may_not_import_frameworks(tmp_path: Path) -> None:
    violating_file = _write(
        tmp_path, "bistro/domain/order/model.py", "from prometheus_client import Counter\n"
    )

    result = _run("--root", str(tmp_path))

    assert result.returncode != 0
    assert "prometheus_client" in result.stdout
    assert str(violating_file) in result.stdout
    assert "forbidden in bistro.domain" in result.stdout


def test_menu_may_not_depend_on_orders(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "bistro/domain/menu/catalog.py",
        "from bistro.domain.order.status import OrderStatus\n",
    )

    result = _run("--root", str(tmp_path))

    assert result.returncode != 0
    assert "forbidden in bistro.domain.menu" in result.stdout


def test_application_may_import_infrastructure_but_not_tools(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "bistro/application/use_cases/start_order.py",
        "from bistro.infrastructure import config\n",
    )
    assert _run("--root", str(tmp_path)).returncode == 0

    _write(tmp_path, "bistro/application/use_cases/demo_hook.py", "import bistro.tools.demo\n")
    result = _run("--root", str(tmp_path))

    assert result.returncode != 0
    assert "bistro.tools.demo" in result.stdout


def test_order_cycle_imports_must_be_type_only(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "bistro/domain/order/updater.py",
        "from bistro.domain.order.entities import Order\n",
    )

    result = _run("--root", str(tmp_path))

    assert result.returncode != 0
    assert "must be imported under TYPE_CHECKING" in result.stdout

    _write(
        tmp_path,
        "bistro/domain/order/updater.py",
        "from typing import TYPE_CHECKING\n"
        "\n"
        "if TYPE_CHECKING:\n"
        "    from bistro.domain.order.entities import Order\n",
    )

    assert _run("--root", str(tmp_path)).returncode == 0


def test_project_sources_are_clean() -> None:
    result = _run()

    assert result.returncode == 0, result.stdout
    assert "depcheck passed" in result.stdout
