# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Contract schemas, one class per schema version.

Every version keeps a map of receive functions keyed by name. Maps are written with a u32 count and their keys sorted,
names are UTF-8 strings with a u32 length prefix.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Generic, Optional, TypeVar

from typing_extensions import Self, override

from ccdparams.exception import FunctionNotFoundError, MissingParameterTypeError
from ccdparams.schema.function import FunctionV1, FunctionV2
from ccdparams.schema_types import SchemaType
from ccdparams.serialization import Deserializer, Serializer
from ccdparams.serialization.compound_encoding.mapping import decode_mapping, encode_mapping
from ccdparams.serialization.compound_encoding.optional import decode_optional, encode_optional
from ccdparams.serialization.encoding.utf8 import decode_utf8, encode_utf8

F = TypeVar('F', FunctionV1, FunctionV2)


def _encode_type(serializer: Serializer, schema_type: SchemaType, /) -> None:
    schema_type.serialize(serializer)


def _encode_function(serializer: Serializer, function: FunctionV1 | FunctionV2, /) -> None:
    function.serialize(serializer)


def _encode_sorted_mapping(serializer: Serializer, mapping: dict[str, F], value_encoder: Callable) -> None:
    encode_mapping(serializer, dict(sorted(mapping.items())), encode_utf8, value_encoder)


class ContractSchema(ABC):
    """ Base class of the contract schema of every schema version.
    """

    # XXX: subclasses must initialize this property
    version: ClassVar[int]

    @classmethod
    @abstractmethod
    def deserialize(cls, deserializer: Deserializer) -> Self:
        raise NotImplementedError

    @abstractmethod
    def serialize(self, serializer: Serializer) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_init_parameter_type(self, contract_name: str) -> SchemaType:
        """ Type of the parameter of the init function, `contract_name` is only used in error messages.
        """
        raise NotImplementedError

    @abstractmethod
    def get_receive_parameter_type(self, contract_name: str, receive_function_name: str) -> SchemaType:
        """ Type of the parameter of a receive function, `contract_name` is only used in error messages.
        """
        raise NotImplementedError

    @abstractmethod
    def to_json(self) -> dict[str, SchemaType.Json]:
        raise NotImplementedError


@dataclass(slots=True, frozen=True, kw_only=True)
class ContractV0(ContractSchema):
    """ Legacy contract schema: the init and receive entries are directly the parameter types.
    """

    version: ClassVar[int] = 0

    state: Optional[SchemaType] = None
    init: Optional[SchemaType] = None
    receive: dict[str, SchemaType] = field(default_factory=dict)

    @override
    @classmethod
    def deserialize(cls, deserializer: Deserializer) -> Self:
        state = decode_optional(deserializer, SchemaType.deserialize)
        init = decode_optional(deserializer, SchemaType.deserialize)
        receive = decode_mapping(deserializer, decode_utf8, SchemaType.deserialize)
        return cls(state=state, init=init, receive=receive)

    @override
    def serialize(self, serializer: Serializer) -> None:
        encode_optional(serializer, self.state, _encode_type)
        encode_optional(serializer, self.init, _encode_type)
        encode_mapping(serializer, dict(sorted(self.receive.items())), encode_utf8, _encode_type)

    @override
    def get_init_parameter_type(self, contract_name: str) -> SchemaType:
        if self.init is None:
            raise MissingParameterTypeError(f'no parameter type for the init function of contract {contract_name!r}')
        return self.init

    @override
    def get_receive_parameter_type(self, contract_name: str, receive_function_name: str) -> SchemaType:
        if receive_function_name not in self.receive:
            raise FunctionNotFoundError(
                f'receive function {receive_function_name!r} not found in contract {contract_name!r}'
            )
        return self.receive[receive_function_name]

    @override
    def to_json(self) -> dict[str, SchemaType.Json]:
        result: dict[str, SchemaType.Json] = {}
        if self.init is not None:
            result['init'] = self.init.to_json_schema()
        if self.state is not None:
            result['state'] = self.state.to_json_schema()
        if self.receive:
            result['entrypoints'] = {name: t.to_json_schema() for name, t in sorted(self.receive.items())}
        return result


@dataclass(slots=True, frozen=True, kw_only=True)
class _ContractWithFunctions(ContractSchema, Generic[F]):
    """ Contract schemas from version 1 onwards describe each entry point with a function schema.
    """

    # XXX: subclasses must initialize this property
    function_class: ClassVar[type]

    init: Optional[F] = None
    receive: dict[str, F] = field(default_factory=dict)

    @classmethod
    def _deserialize_functions(cls, deserializer: Deserializer) -> tuple[Optional[F], dict[str, F]]:
        init = decode_optional(deserializer, cls.function_class.deserialize)
        receive = decode_mapping(deserializer, decode_utf8, cls.function_class.deserialize)
        return init, receive

    def _serialize_functions(self, serializer: Serializer) -> None:
        encode_optional(serializer, self.init, _encode_function)
        _encode_sorted_mapping(serializer, self.receive, _encode_function)

    @override
    def get_init_parameter_type(self, contract_name: str) -> SchemaType:
        if self.init is None:
            raise FunctionNotFoundError(f'init function not found in contract {contract_name!r}')
        if self.init.parameter is None:
            raise MissingParameterTypeError(f'no parameter type for the init function of contract {contract_name!r}')
        return self.init.parameter

    @override
    def get_receive_parameter_type(self, contract_name: str, receive_function_name: str) -> SchemaType:
        function = self.receive.get(receive_function_name)
        if function is None:
            raise FunctionNotFoundError(
                f'receive function {receive_function_name!r} not found in contract {contract_name!r}'
            )
        if function.parameter is None:
            raise MissingParameterTypeError(
                f'no parameter type for receive function {receive_function_name!r} of contract {contract_name!r}'
            )
        return function.parameter

    @override
    def to_json(self) -> dict[str, SchemaType.Json]:
        result: dict[str, SchemaType.Json] = {}
        if self.init is not None:
            result['init'] = self.init.to_json()
        if self.receive:
            result['entrypoints'] = {name: function.to_json() for name, function in sorted(self.receive.items())}
        return result


@dataclass(slots=True, frozen=True, kw_only=True)
class ContractV1(_ContractWithFunctions[FunctionV1]):
    version: ClassVar[int] = 1
    function_class: ClassVar[type] = FunctionV1

    @override
    @classmethod
    def deserialize(cls, deserializer: Deserializer) -> Self:
        init, receive = cls._deserialize_functions(deserializer)
        return cls(init=init, receive=receive)

    @override
    def serialize(self, serializer: Serializer) -> None:
        self._serialize_functions(serializer)


@dataclass(slots=True, frozen=True, kw_only=True)
class ContractV2(_ContractWithFunctions[FunctionV2]):
    version: ClassVar[int] = 2
    function_class: ClassVar[type] = FunctionV2

    @override
    @classmethod
    def deserialize(cls, deserializer: Deserializer) -> Self:
        init, receive = cls._deserialize_functions(deserializer)
        return cls(init=init, receive=receive)

    @override
    def serialize(self, serializer: Serializer) -> None:
        self._serialize_functions(serializer)


@dataclass(slots=True, frozen=True, kw_only=True)
class ContractV3(_ContractWithFunctions[FunctionV2]):
    """ Same as version 2 with the type of the events the contract logs, written after the receive functions.
    """

    version: ClassVar[int] = 3
    function_class: ClassVar[type] = FunctionV2

    event: Optional[SchemaType] = None

    @override
    @classmethod
    def deserialize(cls, deserializer: Deserializer) -> Self:
        init, receive = cls._deserialize_functions(deserializer)
        event = decode_optional(deserializer, SchemaType.deserialize)
        return cls(init=init, receive=receive, event=event)

    @override
    def serialize(self, serializer: Serializer) -> None:
        self._serialize_functions(serializer)
        encode_optional(serializer, self.event, _encode_type)

    @override
    def to_json(self) -> dict[str, SchemaType.Json]:
        result = super(ContractV3, self).to_json()
        if self.event is not None:
            result['event'] = self.event.to_json_schema()
        return result
