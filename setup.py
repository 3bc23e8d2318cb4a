from setuptools import setup


setup(
    name="school-intake",
    version="0.1.0",
    description="Map free-text spreadsheet headers from school data exports onto a fixed record schema",
    packages=["school_intake"],
    python_requires=">=3.9",
    install_requires=[
        "pandas",
        "chardet",
        "openpyxl",
    ],
    extras_require={
        "excel-legacy": ["xlrd"],
        "test": ["pytest"],
        "all": ["xlrd"],
    },
    entry_points={
        "console_scripts": [
            "school-intake=school_intake.cli:main",
        ]
    },
)
