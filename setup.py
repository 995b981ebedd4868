"""Setup script with optional Cython compilation of escpos_socket_manager."""

import glob
import os
from pathlib import Path

from setuptools import setup
from setuptools.extension import Extension
from setuptools.command.build_py import build_py as build_py_orig

# Base directory for source files
SRC_DIR = Path("escpos_socket_manager")

# Files to keep as pure Python
# - __init__.py / __main__.py: needed for package imports and `python -m`
# - __pycache__: not source files
EXCLUDE_PATTERNS = [
    "__init__.py",
    "__main__.py",
    "__pycache__",
]

# Compiled wheels are opt-in; the default build is pure Python. A compiled build
# needs Cython in the build environment:
#   pip install Cython && ESCPOS_BUILD_COMPILED=1 pip install --no-build-isolation .
BUILD_COMPILED = os.environ.get("ESCPOS_BUILD_COMPILED", "0") == "1"

if not BUILD_COMPILED:
    ext_modules = []
    cmdclass = {}
else:
    from Cython.Build import cythonize

    py_files = glob.glob(str(SRC_DIR / "**/*.py"), recursive=True)
    extensions = []
    compiled_modules = set()

    for filepath in py_files:
        normalized_path = filepath.replace("\\", "/")
        if any(pattern in normalized_path for pattern in EXCLUDE_PATTERNS):
            continue

        # e.g. "escpos_socket_manager/backends/systemd.py" -> "escpos_socket_manager.backends.systemd"
        module_name = ".".join(Path(filepath).with_suffix("").parts)
        extensions.append(Extension(name=module_name, sources=[filepath]))
        compiled_modules.add(module_name)

    # Leave compiled .py sources out of the wheel
    class build_py(build_py_orig):
        def find_package_modules(self, package, package_dir):
            modules = super().find_package_modules(package, package_dir)
            return [
                (pkg, mod, file)
                for (pkg, mod, file) in modules
                if f"{pkg}.{mod}" not in compiled_modules
            ]

    cmdclass = {"build_py": build_py}
    ext_modules = cythonize(
        extensions,
        compiler_directives={
            "language_level": "3",
            "embedsignature": True,  # Preserves function signatures in .so
        },
        annotate=False,
    )

setup(
    ext_modules=ext_modules,
    cmdclass=cmdclass,
)
