from setuptools import setup, find_namespace_packages

setup(
    name="tube-mp3",
    version="0.1.0",
    packages=find_namespace_packages(include=["domain", "adapters"]),
    py_modules=["cli", "config", "i18n", "logger_config"],
    include_package_data=True,
    install_requires=[
        "typer",
        "rich",
        "pymonad>=2.4.0",
        "yt-dlp",
        "PyYAML",
        "toolz",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-mock",
            "ruff",
        ]
    },
    entry_points={
        "console_scripts": [
            "tube-mp3 = cli:app",
        ],
    },
    description="A CLI tool to download YouTube videos and playlists as MP3 with a download history.",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.8",
)
