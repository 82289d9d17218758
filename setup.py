#!/usr/bin/env python3

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="video-date-rename",
    version="1.0.0",
    author="Vibe Tools",
    author_email="tools@vibe.dev",
    description="A tool to rename video files by modification date, resolution and frame rate",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/vibe-tools/video-date-rename",
    packages=find_packages(include=["video_date_rename", "video_date_rename.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Video",
        "Topic :: System :: Filesystems",
        "Topic :: Utilities",
    ],
    python_requires=">=3.7",
    install_requires=[
        "ffmpeg-python>=0.2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "video_date_rename=video_date_rename.cli:main",
        ],
    },
    keywords="video, rename, date, timestamp, resolution, frame rate, ffprobe",
    project_urls={
        "Bug Reports": "https://github.com/vibe-tools/video-date-rename/issues",
        "Source": "https://github.com/vibe-tools/video-date-rename",
    },
)
