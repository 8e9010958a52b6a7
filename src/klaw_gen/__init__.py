"""klaw-gen: Composable random value generators for property-based testing.

Generators are immutable descriptions run against a randomness source.
Fueled generators build finite random instances of recursive types, and
persistent arrays back an unbiased shuffle.

Flat imports (preferred):
    from klaw_gen import Gen, pure, int_range, PRNGSource
    from klaw_gen import backtrack, guard, succeed, cond
    from klaw_gen import fix, choose, nullary, unary, binary, generate

Submodule imports (for organization):
    from klaw_gen.gen import Gen, loop
    from klaw_gen.fueled import Fueled, tick, prod, zero
    from klaw_gen.parray import PArray, shuffle
    from klaw_gen.runtime import init, sample
"""

# Backtracking
from klaw_gen.backtrack import backtrack, cond, guard, retry, succeed

# Containers
from klaw_gen.collect import collect

# Decorators
from klaw_gen.do import do

# Errors
from klaw_gen.errors import (
    BacktrackExhaustedError,
    GenError,
    IndexOutOfRangeError,
    InvalidBoundError,
    MissingIndexError,
    SourceExhaustedError,
)

# Fueled generators
from klaw_gen.fueled import (
    Fueled,
    binary,
    choose,
    fix,
    fix_with,
    generate,
    nullary,
    prod,
    tick,
    unary,
    zero,
)

# Core monad
from klaw_gen.gen import (
    Continue,
    Done,
    Gen,
    bind,
    boolean,
    int_below,
    join,
    loop,
    map_gen,
    pair,
    pure,
    run,
    traverse_list,
)
from klaw_gen.option import Nothing, NothingType, Option, Some

# Persistent arrays
from klaw_gen.parray import PArray, shuffle, traverse

# Runtime
from klaw_gen.runtime import init, sample

# Scalars
from klaw_gen.scalar import (
    Bound,
    char_range,
    digit,
    int_range,
    lowercase,
    one_of,
    select,
    shuffle_list,
    split_int,
    string,
    unit,
    uppercase,
)

# Sources
from klaw_gen.source import PRNGSource, RandomSource, ReplaySource

__all__ = [
    # Errors
    'BacktrackExhaustedError',
    # Scalars
    'Bound',
    # Core monad
    'Continue',
    'Done',
    # Fueled generators
    'Fueled',
    'Gen',
    'GenError',
    'IndexOutOfRangeError',
    'InvalidBoundError',
    'MissingIndexError',
    # Option types
    'Nothing',
    'NothingType',
    'Option',
    # Persistent arrays
    'PArray',
    # Sources
    'PRNGSource',
    'RandomSource',
    'ReplaySource',
    'Some',
    'SourceExhaustedError',
    # Backtracking
    'backtrack',
    'binary',
    'bind',
    'boolean',
    'char_range',
    'choose',
    'collect',
    'cond',
    'digit',
    'do',
    'fix',
    'fix_with',
    'generate',
    'guard',
    # Runtime
    'init',
    'int_below',
    'int_range',
    'join',
    'loop',
    'lowercase',
    'map_gen',
    'nullary',
    'one_of',
    'pair',
    'prod',
    'pure',
    'retry',
    'run',
    'sample',
    'select',
    'shuffle',
    'shuffle_list',
    'split_int',
    'string',
    'succeed',
    'tick',
    'traverse',
    'traverse_list',
    'unary',
    'unit',
    'uppercase',
    'zero',
]
