"""Setup script for Payment Processing."""

from setuptools import setup, find_packages

setup(
    name="payment_processing",
    version="1.0.0",
    description="Polymorphic payment processing with Stripe, PayPal and cash processors",
    author="ML Roadmap Bootcamp",
    python_requires=">=3.9",
    packages=find_packages(include=["payment_processing", "payment_processing.*"]),
    install_requires=[
        line.strip()
        for line in open("requirements.txt")
        if line.strip() and not line.startswith("#") and not line.startswith("git+")
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "payments=payment_processing.cli:main",
        ]
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Financial and Insurance Industry",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
