"""Plugin with rules only."""

rules = {
    "no-foo": {"meta": {"type": "problem"}},
}
