# core/textnorm.py
import re

LEAD = re.compile(r"^\s*(near|around|at|from|to)\s+", re.I)
SPACES = re.compile(r"\s+")

def normalize_place(q: str) -> str:
    q = LEAD.sub("", (q or "").strip())
    return SPACES.sub(" ", q).strip().lower()
