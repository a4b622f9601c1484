"""Plugin exporting a single ``plugin`` mapping with shareable configs."""

plugin = {
    "meta": {"name": "eslint-plugin-fixture4"},
    "rules": {"strict-thing": {}},
    "configs": {
        "recommended": {
            "plugins": ["fixture4"],
            "rules": {"fixture4/strict-thing": "error"},
        },
    },
    "processors": {
        ".txt": {"preprocess": None},
    },
}
