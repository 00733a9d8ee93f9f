# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Built-in Kaitai Struct scalar types."""

import re

# Standard types defined in the Kaitai Struct documentation.
STANDARD_TYPES = frozenset([
    "f4", "f8", "f4be", "f8be", "f4le", "f8le",
    "s1", "s2", "s4", "s8", "s1be", "s2be", "s4be", "s8be", "s1le", "s2le", "s4le", "s8le",
    "u1", "u2", "u4", "u8", "u1be", "u2be", "u4be", "u8be", "u1le", "u2le", "u4le", "u8le",
    "str", "strz",
])

BIT_TYPE_PATTERN = re.compile(r"b\d+")


def is_standard_type(type_name: str) -> bool:
    """Check if the given type is one of the standard types.

    Surrounding whitespace is ignored; the comparison is case-sensitive.
    Bit-sized integers (``b1``, ``b12``...) are standard as well.
    """
    name = type_name.strip()
    return name in STANDARD_TYPES or BIT_TYPE_PATTERN.fullmatch(name) is not None
