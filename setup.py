from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="uiharness",
    version="1.0.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Data-driven Gherkin UI test harness on Playwright and pytest-bdd",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/uiharness",
    packages=find_packages(exclude=["tests", "tests.*", "e2e", "e2e.*"]),
    py_modules=["run"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Testing",
        "Framework :: Pytest",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "playwright>=1.40.0",
        "pyyaml>=6.0.1",
        "click>=8.1.7",
        "pytest>=7.4.3",
        "pytest-bdd>=8.0.0",
        "allure-pytest-bdd>=2.13.2",
        "pandas>=2.0.0",
        "openpyxl>=3.1.2",
        "jinja2>=3.1.2",
        "colorama>=0.4.6",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest-cov>=4.1.0",
        ],
        "dev": [
            "pytest-cov>=4.1.0",
            "black>=23.10.0",
            "flake8>=6.1.0",
            "pre-commit>=3.5.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "uiharness=run:main",
        ],
    },
    include_package_data=True,
    package_data={
        "uiharness": ["config/*.yaml", "config/environments/*.yaml"],
    },
    keywords="automation testing playwright bdd gherkin pytest-bdd data-driven allure",
    license="MIT",
)
