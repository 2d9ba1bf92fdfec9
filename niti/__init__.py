"""Niti IDE: a tabbed code editor with a serial-device monitor."""
