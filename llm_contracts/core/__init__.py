"""Core — errors and logging shared by every layer."""
