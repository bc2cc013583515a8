from setuptools import setup
from pathlib import Path

setup(
    name='lightcr',
    version="0.1.0",
    description='Descriptors and request builder for arbitrary kubernetes resources',
    long_description=Path("README.md").read_text(),
    long_description_content_type="text/markdown",
    license='MIT',
    packages=['lightcr', 'lightcr.core', 'lightcr.utils'],
    package_data={'lightcr': ['py.typed']},
    python_requires='>=3.8',
    install_requires=[
        'httpx >= 0.28.1, < 1.0.0',
        'PyYAML',
        'inflect'
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-asyncio",
            "respx"
        ]
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13'
    ]
)
