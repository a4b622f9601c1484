"""Parser fixture."""


def parse_for_eslint(text, options=None):
    return {"ast": None, "text": text}
