"""
MP3 Tag Reader - ID3v2.3 tag viewing and editing for MP3 files.

This package provides tools to:
- Read the title, artist, album, year, genre and comment frames of a tag
- Write a fresh set of frames in front of an untagged file
- Edit a single frame in place while passing every other byte through
"""

__version__ = "1.0.0"
