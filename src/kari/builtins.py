## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import operators
from . import combinators
from .loader import get_kari_name
from .library import Library


def load_builtins_library() -> Library:
    aliases = {'+': 'add', '*': 'mul', '=': 'equal?'}
    lib = Library(aliases=aliases)

    # Functions (wrapped via Library helper)
    for module, prefix in ((operators, 'op_'), (combinators, 'comb_')):
        for k in dir(module):
            if not k.startswith(prefix): continue
            lib.add_function(get_kari_name(k), getattr(module, k))
    return lib
