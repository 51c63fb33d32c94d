from pathlib import Path
from setuptools import setup, find_packages

PROJECT_ROOT = Path(__file__).parent.resolve()
SCRIPTS_DIR = PROJECT_ROOT / "bin"

script_files = []
if SCRIPTS_DIR.exists():
    for path in sorted(SCRIPTS_DIR.iterdir()):
        if path.is_file():
            script_files.append(str(path.relative_to(PROJECT_ROOT)))

setup(
    name="yakp",
    version="0.2.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    scripts=script_files,
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2",
        "rich",
        "typer",
    ],
    extras_require={
        "test": [
            "pytest",
            "PyYAML",
        ],
    },
)
