#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

from typing import Optional, TypeVar

T = TypeVar('T')


def single_or_none(_list: list[T]) -> Optional[T]:
    """Function to convert a list with at most one element to the given element or an empty list to None.

    >>> single_or_none([])
    >>> single_or_none([1])
    1
    >>> single_or_none([1, 2])
    Traceback (most recent call last):
     ...
    ValueError: expected at most one element, got 2
    """
    if len(_list) > 1:
        raise ValueError(f'expected at most one element, got {len(_list)}')

    return _list[0] if _list else None
