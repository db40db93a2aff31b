"""Fixed lookup tables that every generated field is drawn from."""

MALE_NAMES: tuple[str, ...] = (
    "Peter",
    "John",
    "Martin",
    "Thomas",
    "Michael",
    "James",
    "Robert",
    "William",
)

FEMALE_NAMES: tuple[str, ...] = (
    "Emma",
    "Olivia",
    "Sophia",
    "Ava",
    "Isabella",
    "Mia",
    "Emily",
    "Amelia",
)

SURNAMES: tuple[str, ...] = (
    "Smith",
    "Johnson",
    "Brown",
    "Taylor",
    "Anderson",
    "Thomas",
    "Jackson",
    "White",
)

# Hours per week
WORKLOADS: tuple[int, ...] = (10, 20, 30, 40)

GENDERS: tuple[str, ...] = ("male", "female")

FIRST_NAMES_BY_GENDER: dict[str, tuple[str, ...]] = {
    "male": MALE_NAMES,
    "female": FEMALE_NAMES,
}
