"""WaveLaunch workflow automation service."""
