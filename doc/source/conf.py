import os
from pathlib import Path
import re
import sys
import mpllinelabel

# -- General configuration ------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.intersphinx',
    'sphinx.ext.napoleon',
    'sphinx_gallery.gen_gallery',
]
_req_path = Path('../../.doc-requirements.txt')
needs_extensions = {
    'sphinx_gallery.gen_gallery':
    dict(line.split('==') for line in _req_path.read_text().splitlines())[
        'sphinx-gallery']
}

exclude_patterns = ['_build']

project = 'mpllinelabel'
copyright = '2026–present, mpllinelabel contributors'
author = 'mpllinelabel contributors'

version = release = re.sub(r'\.dirty$', '', mpllinelabel.__version__)

default_role = 'any'

python_use_unqualified_type_names = True

# -- Options for HTML output ----------------------------------------------

html_theme = 'pydata_sphinx_theme'

# -- Misc. configuration --------------------------------------------------

autodoc_member_order = 'bysource'

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'matplotlib': ('https://matplotlib.org/stable', None),
}

# CustomSortKey cannot be defined *here* because it would be unpicklable as
# this file is exec'd rather than imported.
sys.path.append(".")
from _local_ext import CustomSortKey

os.environ.pop("DISPLAY", None)  # Don't warn about non-GUI when running s-g.

sphinx_gallery_conf = {
    'backreferences_dir': None,
    'examples_dirs': '../../examples',
    'filename_pattern': r'.*\.py',
    'gallery_dirs': 'examples',
    'min_reported_time': 1,
    'within_subsection_order': CustomSortKey,
}
