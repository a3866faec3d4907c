from sphinx_gallery.sorting import ExampleTitleSortKey

# Identifier sources first, in the order in which `enable` documents them.
_leading_examples = ["basic.py", "custom_ids.py", "legend.py"]


class CustomSortKey(ExampleTitleSortKey):
    def __call__(self, filename):
        if filename in _leading_examples:
            return str(_leading_examples.index(filename))
        return super().__call__(filename)
