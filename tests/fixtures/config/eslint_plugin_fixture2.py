"""Plugin with a file-extension processor and a named processor."""


class MarkdownProcessor:
    meta = {"name": "markdown"}

    def preprocess(self, text, filename):
        return [text]

    def postprocess(self, messages, filename):
        return [message for group in messages for message in group]


processors = {
    ".md": MarkdownProcessor(),
    "markdown": MarkdownProcessor(),
}
