"""Domain helpers for chirp content validation."""
from __future__ import annotations

from chirpy.core.errors import ValidationError

MAX_CHIRP_LENGTH = 140
MASK = "****"
PROFANE_WORDS = {
    "kerfuffle",
    "sharbert",
    "fornax",
}


def mask_profanity(body: str) -> str:
    """Replace whole space-separated tokens found in PROFANE_WORDS, ignoring case."""
    words = body.split(" ")
    return " ".join(MASK if word.lower() in PROFANE_WORDS else word for word in words)


def validate_chirp(body: str) -> str:
    """Return the cleaned body, or raise ValidationError when it is too long."""
    if len(body) > MAX_CHIRP_LENGTH:
        raise ValidationError("Chirp is too long")
    return mask_profanity(body)
