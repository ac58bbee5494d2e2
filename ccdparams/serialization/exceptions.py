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


class SerializationError(ValueError):
    """Base class for errors raised while writing or reading a byte sequence."""


class OutOfDataError(SerializationError):
    """Raised when a read requires more bytes than what is left."""


class TooLongError(SerializationError):
    """Raised when a value does not fit the size it was given."""


class BadDataError(SerializationError):
    """Raised when the bytes read cannot be interpreted."""
