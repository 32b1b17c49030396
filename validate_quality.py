#!/usr/bin/env python3
"""
Script de Validación de Calidad Local - Student Bot

Ejecuta validaciones de calidad antes de subir cambios.

Uso:
  python3 validate_quality.py
  python3 validate_quality.py --scope changed
  python3 validate_quality.py --fix
  python3 validate_quality.py --strict
  python3 validate_quality.py --skip-tests

Opciones:
  --fix         Aplica correcciones automáticas (black/isort)
  --scope       all (default) o changed
  --strict      Hace bloqueantes también mypy y bandit
  --skip-tests  No ejecuta pytest
"""

from __future__ import annotations

import argparse
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple


class Colors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"
    END = "\033[0m"


SOURCE_DIRS = (
    "config",
    "contracts",
    "core",
    "infrastructure",
    "models",
    "services",
    "state_machine",
    "templates",
    "tests",
)
SOURCE_FILES = ("main.py", "validate_quality.py")

CONFIG_FLAKE8 = Path(".flake8")
CONFIG_PYPROJECT = Path("pyproject.toml")


@dataclass
class CheckResult:
    passed: bool
    blocking: bool
    note: str = ""


def print_banner() -> None:
    print(
        f"""
{Colors.CYAN}{Colors.BOLD}VALIDADOR DE CALIDAD - STUDENT BOT{Colors.END}
{Colors.WHITE}
Este script ejecuta las siguientes validaciones:
• Sintaxis Python
• Formato de código (Black)
• Importaciones ordenadas (isort)
• Linting (Flake8)
• Type checking (MyPy)
• Seguridad (Bandit)
• Tests (pytest)
{Colors.END}"""
    )


def print_success(message: str) -> None:
    print(f"{Colors.GREEN}✅ {message}{Colors.END}")


def print_error(message: str) -> None:
    print(f"{Colors.RED}❌ {message}{Colors.END}")


def print_warning(message: str) -> None:
    print(f"{Colors.YELLOW}⚠️  {message}{Colors.END}")


def print_info(message: str) -> None:
    print(f"{Colors.BLUE}ℹ️  {message}{Colors.END}")


def run_command(
    cmd: Sequence[str], description: str, timeout: int = 120
) -> Tuple[bool, str]:
    print(f"\n{Colors.CYAN}🔍 Ejecutando: {description}{Colors.END}")
    print(f"{Colors.MAGENTA}Comando: {' '.join(cmd)}{Colors.END}")

    try:
        result = subprocess.run(  # nosec B603
            list(cmd), capture_output=True, text=True, timeout=timeout
        )
    except subprocess.TimeoutExpired:
        print_error(f"{description} - TIMEOUT ({timeout}s)")
        return False, f"Timeout after {timeout} seconds"
    except OSError as exc:
        print_error(f"{description} - EXCEPTION: {exc}")
        return False, str(exc)

    output = (result.stdout or "") + (result.stderr or "")
    if result.returncode == 0:
        print_success(f"{description} - OK")
        if output.strip():
            print(f"{Colors.WHITE}{output}{Colors.END}")
        return True, output

    print_error(f"{description} - ERROR")
    if output.strip():
        print(f"{Colors.YELLOW}{output}{Colors.END}")
    return False, output


def module_available(module: str) -> bool:
    ok, _ = run_command(
        [sys.executable, "-m", module, "--version"], f"Disponibilidad de {module}"
    )
    if not ok:
        print_warning(f"{module} no está instalado: pip install -e '.[dev,test]'")
    return ok


def _git_lines(cmd: Sequence[str]) -> List[str]:
    try:
        result = subprocess.run(  # nosec B603
            list(cmd), capture_output=True, text=True, timeout=10, check=False
        )
    except (OSError, subprocess.TimeoutExpired):
        return []

    if result.returncode != 0:
        return []

    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def get_changed_python_files() -> List[Path]:
    paths = set()
    for cmd in (
        ["git", "diff", "--name-only", "--diff-filter=ACMRTUXB"],
        ["git", "diff", "--cached", "--name-only", "--diff-filter=ACMRTUXB"],
        ["git", "ls-files", "--others", "--exclude-standard"],
    ):
        for line in _git_lines(cmd):
            if line.endswith(".py") and Path(line).exists():
                paths.add(Path(line))
    return sorted(paths)


def discover_python_files() -> List[Path]:
    files: List[Path] = []
    for directory in SOURCE_DIRS:
        files.extend(sorted(Path(directory).rglob("*.py")))
    files.extend(Path(name) for name in SOURCE_FILES if Path(name).exists())
    return files


def build_targets(scope: str) -> List[Path]:
    if scope == "all":
        return discover_python_files()

    project = {path.resolve() for path in discover_python_files()}
    changed = [path for path in get_changed_python_files() if path.resolve() in project]
    if changed:
        print_info(f"Scope changed: {len(changed)} archivos Python detectados")
    else:
        print_warning("Scope changed: no hay archivos Python cambiados")
    return changed


def _skip_if_empty(files: List[Path], tool: str) -> bool:
    if not files:
        print_info(f"Sin archivos para {tool}")
        return True
    return False


def validate_syntax(files: List[Path]) -> CheckResult:
    print(f"\n{Colors.BOLD}{Colors.BLUE}🐍 VALIDACIÓN DE SINTAXIS PYTHON{Colors.END}")
    if _skip_if_empty(files, "py_compile"):
        return CheckResult(passed=True, blocking=True)

    success, _ = run_command(
        [sys.executable, "-m", "py_compile", *(str(f) for f in files)],
        "Python syntax",
    )
    return CheckResult(passed=success, blocking=True)


def validate_formatting(files: List[Path], fix: bool) -> CheckResult:
    print(f"\n{Colors.BOLD}{Colors.BLUE}📝 VALIDACIÓN DE FORMATO (BLACK){Colors.END}")
    if _skip_if_empty(files, "black"):
        return CheckResult(passed=True, blocking=True)
    if not module_available("black"):
        return CheckResult(passed=False, blocking=True, note="black no instalado")

    cmd = [sys.executable, "-m", "black"]
    if not fix:
        cmd.append("--check")
    cmd.extend(str(f) for f in files)

    success, _ = run_command(cmd, "Black")
    return CheckResult(passed=success, blocking=True)


def validate_imports(files: List[Path], fix: bool) -> CheckResult:
    print(
        f"\n{Colors.BOLD}{Colors.BLUE}📦 VALIDACIÓN DE IMPORTACIONES (ISORT){Colors.END}"
    )
    if _skip_if_empty(files, "isort"):
        return CheckResult(passed=True, blocking=True)
    if not module_available("isort"):
        return CheckResult(passed=False, blocking=True, note="isort no instalado")

    cmd = [sys.executable, "-m", "isort"]
    if not fix:
        cmd.append("--check-only")
    cmd.extend(str(f) for f in files)

    success, _ = run_command(cmd, "isort")
    return CheckResult(passed=success, blocking=True)


def validate_linting(files: List[Path]) -> CheckResult:
    print(f"\n{Colors.BOLD}{Colors.BLUE}🔍 VALIDACIÓN LINTING (FLAKE8){Colors.END}")
    if _skip_if_empty(files, "flake8"):
        return CheckResult(passed=True, blocking=True)
    if not module_available("flake8"):
        return CheckResult(passed=False, blocking=True, note="flake8 no instalado")

    cmd = [sys.executable, "-m", "flake8", "--config", str(CONFIG_FLAKE8)]
    cmd.extend(str(f) for f in files)

    success, _ = run_command(cmd, "Flake8")
    return CheckResult(passed=success, blocking=True)


def validate_types(files: List[Path], strict: bool) -> CheckResult:
    print(f"\n{Colors.BOLD}{Colors.BLUE}🔧 VALIDACIÓN DE TIPOS (MYPY){Colors.END}")
    sources = [f for f in files if f.parts[0] != "tests"]
    if _skip_if_empty(sources, "mypy"):
        return CheckResult(passed=True, blocking=strict)
    if not module_available("mypy"):
        return CheckResult(passed=False, blocking=strict, note="mypy no instalado")

    cmd = [sys.executable, "-m", "mypy", "--config-file", str(CONFIG_PYPROJECT)]
    cmd.extend(str(f) for f in sources)

    success, _ = run_command(cmd, "MyPy", timeout=180)
    return CheckResult(passed=success, blocking=strict)


def validate_security(files: List[Path], strict: bool) -> CheckResult:
    print(
        f"\n{Colors.BOLD}{Colors.BLUE}🔒 VALIDACIÓN DE SEGURIDAD (BANDIT){Colors.END}"
    )
    sources = [f for f in files if f.parts[0] != "tests"]
    if _skip_if_empty(sources, "bandit"):
        return CheckResult(passed=True, blocking=strict)
    if not module_available("bandit"):
        return CheckResult(passed=False, blocking=strict, note="bandit no instalado")

    cmd = [sys.executable, "-m", "bandit", "-q", "-c", str(CONFIG_PYPROJECT)]
    cmd.extend(str(f) for f in sources)

    success, _ = run_command(cmd, "Bandit", timeout=180)
    return CheckResult(passed=success, blocking=strict)


def run_tests() -> CheckResult:
    print(f"\n{Colors.BOLD}{Colors.BLUE}🧪 TESTS (PYTEST){Colors.END}")
    success, _ = run_command([sys.executable, "-m", "pytest", "-q"], "pytest", 300)
    return CheckResult(passed=success, blocking=True)


def summarize_results(results: Dict[str, CheckResult]) -> int:
    print(f"\n{Colors.BOLD}{Colors.CYAN}RESUMEN DE VALIDACIÓN{Colors.END}")

    for check_name, result in results.items():
        if result.passed:
            status = "✅ PASÓ"
            color = Colors.GREEN
        else:
            gate = "BLOCKING" if result.blocking else "ADVISORY"
            status = f"❌ FALLÓ ({gate})"
            color = Colors.RED if result.blocking else Colors.YELLOW
        print(f"{color}{check_name.upper():<12}: {status}{Colors.END}")

    blocking_failed = [
        name
        for name, result in results.items()
        if result.blocking and not result.passed
    ]
    total_blocking = sum(1 for r in results.values() if r.blocking)
    passed_blocking = sum(1 for r in results.values() if r.blocking and r.passed)

    resumen = f"Resultados bloqueantes: {passed_blocking}/{total_blocking}"
    print(f"\n{Colors.WHITE}{resumen}{Colors.END}")

    if blocking_failed:
        print_error(f"Checks bloqueantes fallidos: {', '.join(blocking_failed)}")
        print_info("Corrige estos checks antes de subir cambios.")
        return 1

    print_success("Checks bloqueantes OK.")
    advisory_failed = [
        name
        for name, result in results.items()
        if not result.blocking and not result.passed
    ]
    if advisory_failed:
        print_warning(f"Checks informativos con fallos: {', '.join(advisory_failed)}")
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validador de calidad para Student Bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Aplica correcciones automáticas (black/isort)",
    )
    parser.add_argument(
        "--scope",
        choices=["changed", "all"],
        default="all",
        help="Alcance de archivos a validar (default: all)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Mypy y Bandit pasan a ser checks bloqueantes",
    )
    parser.add_argument(
        "--skip-tests",
        action="store_true",
        help="No ejecuta pytest",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    print_banner()

    print_info(f"Scope: {args.scope}")
    print_info(f"Strict: {'sí' if args.strict else 'no'}")
    if args.fix:
        print_warning("Modo fix activado (black/isort)")

    for required_config in (CONFIG_FLAKE8, CONFIG_PYPROJECT):
        if not required_config.exists():
            print_error(f"Falta archivo de configuración: {required_config}")
            return 1

    files = build_targets(args.scope)

    results: Dict[str, CheckResult] = {}
    results["syntax"] = validate_syntax(files)
    results["formatting"] = validate_formatting(files, fix=args.fix)
    results["imports"] = validate_imports(files, fix=args.fix)
    results["linting"] = validate_linting(files)
    results["types"] = validate_types(files, strict=args.strict)
    results["security"] = validate_security(files, strict=args.strict)
    if not args.skip_tests:
        results["tests"] = run_tests()

    return summarize_results(results)


if __name__ == "__main__":
    sys.exit(main())
