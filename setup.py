from setuptools import setup, find_packages
from pathlib import Path

readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "Firestore-backed repository for a sneaker collection, with a scripted stub for previews and tests."

setup(
    name="sneaker_collection",
    version="0.1.0",
    description="Firestore-backed repository for a sneaker collection",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
        "firebase-admin>=6.0.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "coverage",
            "hypothesis",
        ],
        "test": ["pytest", "hypothesis"],
    },
)
