"""Build the datasets shared by every codec during a run."""

import random
from typing import Annotated

import msgspec


class Record(msgspec.Struct, frozen=True):
    """One employee record.

    Constraints are enforced whenever records are materialized from decoded
    data with ``msgspec.convert``. Ids are unique within a dataset: ``build``
    and ``generate`` number records sequentially and every codec's decode
    rejects a repeated id.
    """

    id: Annotated[int, msgspec.Meta(gt=0)]
    name: Annotated[str, msgspec.Meta(min_length=1)]
    salary: Annotated[float, msgspec.Meta(ge=0)]


Dataset = tuple[Record, ...]

# Field holding the record list in every document-shaped encoding.
ROOT_FIELD = "employee"

_FIRST_NAMES = [
    "Yasmine", "Kamal", "Amal", "Omar", "Salma", "Youssef", "Nadia", "Karim",
    "Leila", "Hamza", "Sara", "Mehdi", "Imane", "Rachid", "Zineb", "Anas",
    "Hajar", "Adam", "Khadija", "Ilyas", "Meryem", "Ayoub", "Sofia", "Walid",
]


def build() -> Dataset:
    """Return the canonical three-employee fixture."""
    return (
        Record(id=1, name="Yasmine", salary=9000.0),
        Record(id=2, name="Kamal", salary=22000.0),
        Record(id=3, name="Amal", salary=23000.0),
    )


def generate(count: int, seed: int = 0) -> Dataset:
    """
    Generate a synthetic dataset.

    Records get ids ``1..count``; names and salaries come from a
    ``random.Random`` seeded with ``seed`` so the same arguments always
    produce the same dataset.

    Args:
        count: Number of records to generate. Zero yields the empty dataset.
        seed: Seed for the random generator.

    Returns:
        A tuple of records.
    """
    if count < 0:
        raise ValueError(f"record count must be >= 0, got {count}")

    rng = random.Random(seed)
    return tuple(
        Record(
            id=i,
            name=f"{rng.choice(_FIRST_NAMES)} {rng.randint(1, 999)}",
            salary=round(rng.uniform(5_000, 50_000), 2),
        )
        for i in range(1, count + 1)
    )


def to_rows(dataset: Dataset) -> list[dict]:
    """Convert records to plain dicts, in dataset order."""
    return [msgspec.structs.asdict(record) for record in dataset]
