"""Packaging for FocusDeck.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "FocusDeck",
        "CFBundleDisplayName": "FocusDeck",
        "CFBundleIdentifier": "com.focusdeck.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

app_kwargs = {}
if "py2app" in sys.argv:
    app_kwargs = dict(
        app=APP,
        data_files=DATA_FILES,
        options={"py2app": OPTIONS},
        setup_requires=["py2app"],
    )

setup(
    name="focusdeck",
    version="0.1.0",
    packages=find_packages(include=["focusdeck", "focusdeck.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "SQLAlchemy>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["focusdeck = focusdeck.__main__:main"],
    },
    **app_kwargs,
)
