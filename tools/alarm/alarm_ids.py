import random
import string
from typing import Optional

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def generate_id(rng: Optional[random.Random] = None) -> str:
    """Kurze Base-36-ID, z.B. 'k3x9q0b1z'."""
    rng = rng or random
    return "".join(rng.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
