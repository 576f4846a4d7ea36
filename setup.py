from setuptools import find_packages, setup
from pathlib import Path

setup(
    name="tripboard",
    version=Path("./tripboard/VERSION").read_text().strip(),
    description="Raster annotation surface for sketching trips on a map",
    packages=find_packages(include=["tripboard", "tripboard.*"]),
    package_data={"tripboard": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python-headless",
        "easydict",
        "matplotlib",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["tripboard=tripboard.cli:main"]},
)
