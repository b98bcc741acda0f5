from setuptools import setup, find_packages

setup(
    name="sendly",
    version="1.2.0",
    author="Sendly",
    author_email="support@sendly.live",
    description="Async Python client for the Sendly SMS API",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/sendly-live/sendly-python",
    packages=find_packages(include=['sendly', 'sendly.*']),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.9',
    install_requires=[
        "httpx",
        "pydantic>=2",
        "tenacity>=8.2",
        "structlog",
        "aiolimiter",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
