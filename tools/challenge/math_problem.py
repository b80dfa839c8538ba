import random
from dataclasses import dataclass
from typing import Optional

OPERATORS = ("+", "-", "*")


@dataclass(frozen=True)
class MathProblem:
    question: str
    answer: int


def generate_math_problem(rng: Optional[random.Random] = None) -> MathProblem:
    """
    Erzeugt eine Kopfrechenaufgabe.

    Addition nutzt Zahlen von 1 bis 50, Subtraktion 25-74 minus 1-25 (das
    Ergebnis ist nie negativ), Multiplikation 2-13 mal 2-13.
    """
    rng = rng or random
    operator = rng.choice(OPERATORS)

    if operator == "+":
        first, second = rng.randint(1, 50), rng.randint(1, 50)
        answer = first + second
    elif operator == "-":
        first, second = rng.randint(25, 74), rng.randint(1, 25)
        answer = first - second
    else:
        first, second = rng.randint(2, 13), rng.randint(2, 13)
        answer = first * second

    return MathProblem(question=f"{first} {operator} {second} = ?", answer=answer)
