"""
yt-dlp-prompt: interactive stream selection and container tagging for yt-dlp downloads
"""

__version__ = "0.1.0"
