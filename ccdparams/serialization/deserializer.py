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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, final

from .consts import DEFAULT_BYTES_MAX_LENGTH
from .exceptions import TooLongError

if TYPE_CHECKING:
    from .bytes_deserializer import BytesDeserializer


class Deserializer(ABC):
    @staticmethod
    def build_bytes_deserializer(data: bytes | memoryview) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @abstractmethod
    def finalize(self) -> None:
        """Check that all the data was consumed, raises a SerializationError otherwise."""
        raise NotImplementedError

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def peek_byte(self) -> int:
        """Read a single byte but don't consume from buffer."""
        raise NotImplementedError

    @abstractmethod
    def peek_bytes(self, n: int) -> memoryview:
        """Read n single byte but don't consume from buffer."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> int:
        """Read a single byte as unsigned int."""
        raise NotImplementedError

    @abstractmethod
    def _read_bytes(self, n: int) -> memoryview:
        # XXX: it is recommended that implementors of Deserializer specialize this implementation
        return memoryview(bytes(self.read_byte() for _ in range(n)))

    @final
    def read_bytes(self, n: int, *, max_bytes: int | None = DEFAULT_BYTES_MAX_LENGTH) -> memoryview:
        """Read n bytes, errors if there isn't enough data"""
        if max_bytes is not None and n > max_bytes:
            raise TooLongError('requested length exceeds maximum length')
        return self._read_bytes(n)

    @abstractmethod
    def read_all(self) -> memoryview:
        """Read all bytes until the reader is empty."""
        # XXX: it is recommended that implementors of Deserializer specialize this implementation
        def iter_bytes():
            while not self.is_empty():
                yield self.read_byte()
        return memoryview(bytes(iter_bytes()))
