from setuptools import setup, find_packages

setup(
    name="medicare-pricing-client",
    version="1.0.0",
    description="Client for the Medicare Claims Pricing API",
    author="Medicare Repricing Team",
    packages=find_packages(include=["medicare_pricing", "medicare_pricing.*"]),
    py_modules=["pricing_cli"],
    install_requires=[
        "pydantic>=2.0.0",
        "httpx>=0.24.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "medicare-pricing=pricing_cli:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Healthcare Industry",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
