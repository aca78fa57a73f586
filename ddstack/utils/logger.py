# -*- coding: utf-8 -*-
"""
Minimal logger; replace with structlog/loguru if desired.

debug() prints only while the DDSTACK_DEBUG environment variable is set.
"""
import os, sys, time

def _stamp() -> str:
    return time.strftime('%H:%M:%S')

def info(msg: str):  print(f"[{_stamp()}] {msg}", file=sys.stdout)
def warn(msg: str):  print(f"[{_stamp()}] WARNING: {msg}", file=sys.stderr)
def error(msg: str): print(f"[{_stamp()}] ERROR: {msg}", file=sys.stderr)

def debug(msg: str):
    if os.environ.get("DDSTACK_DEBUG"):
        print(f"[{_stamp()}] DEBUG: {msg}", file=sys.stdout)
