import pytest

from ccdparams.exception import JsonParameterError
from ccdparams.schema_types import (
    ArraySchemaType,
    BoolSchemaType,
    ByteArraySchemaType,
    ByteListSchemaType,
    ContractNameSchemaType,
    EnumSchemaType,
    ILeb128SchemaType,
    ListSchemaType,
    MapSchemaType,
    NamedFields,
    NoFields,
    PairSchemaType,
    ReceiveNameSchemaType,
    SchemaType,
    SetSchemaType,
    SizeLength,
    StringSchemaType,
    StructSchemaType,
    TaggedEnumSchemaType,
    U8SchemaType,
    U16SchemaType,
    U32SchemaType,
    ULeb128SchemaType,
    UnnamedFields,
)


def _reason(schema_type: SchemaType, json_value: SchemaType.Json) -> tuple[str, str]:
    with pytest.raises(JsonParameterError) as exc_info:
        schema_type.json_to_bytes(json_value)
    return exc_info.value.reason, exc_info.value.format_path()


def test_pair() -> None:
    schema_type = PairSchemaType(U8SchemaType(), BoolSchemaType())
    assert schema_type.json_to_bytes([1, True]).hex() == '0101'
    assert _reason(schema_type, [1]) == ('expected a pair, got 1 element(s)', '$')
    assert _reason(schema_type, [1, 2]) == ('expected a JSON boolean', '$[1]')


def test_list_and_set() -> None:
    assert ListSchemaType(SizeLength.U16, U8SchemaType()).json_to_bytes([1, 2, 3]).hex() == '0300010203'
    assert ListSchemaType(SizeLength.U8, U16SchemaType()).json_to_bytes([1, 2]).hex() == '0201000200'
    assert ListSchemaType(SizeLength.U32, U8SchemaType()).json_to_bytes([]).hex() == '00000000'
    assert SetSchemaType(SizeLength.U8, U8SchemaType()).json_to_bytes([1]).hex() == '0101'

    schema_type = ListSchemaType(SizeLength.U8, U8SchemaType())
    assert _reason(schema_type, {}) == ('expected a JSON array', '$')
    assert _reason(schema_type, [0] * 256) == ('length 256 does not fit in u8', '$')


def test_map() -> None:
    schema_type = MapSchemaType(SizeLength.U32, StringSchemaType(SizeLength.U8), U8SchemaType())
    assert schema_type.json_to_bytes([['a', 1]]).hex() == '01000000016101'
    assert _reason(schema_type, [['a']]) == ('expected a [key, value] JSON array', '$[0]')
    assert _reason(schema_type, [['a', 1], ['b', 300]]) == ('300 is out of range for u8', '$[1][1]')


def test_array() -> None:
    schema_type = ArraySchemaType(2, U8SchemaType())
    assert schema_type.json_to_bytes([1, 2]).hex() == '0102'
    assert _reason(schema_type, [1, 2, 3]) == ('expected exactly 2 element(s), got 3', '$')


def test_struct() -> None:
    named = StructSchemaType(NamedFields([('a', U8SchemaType()), ('b', BoolSchemaType())]))
    assert named.json_to_bytes({'a': 5, 'b': False}).hex() == '0500'
    # field order comes from the schema, not from the JSON object
    assert named.json_to_bytes({'b': True, 'a': 5}).hex() == '0501'
    assert _reason(named, {'a': 5}) == ("missing field 'b'", '$')
    assert _reason(named, {'a': 5, 'b': True, 'c': 1}) == ("unexpected field(s): 'c'", '$')
    assert _reason(named, [5, True]) == ('expected a JSON object', '$')

    unnamed = StructSchemaType(UnnamedFields([U8SchemaType(), U8SchemaType()]))
    assert unnamed.json_to_bytes([1, 2]).hex() == '0102'
    assert _reason(unnamed, [1]) == ('expected exactly 2 element(s), got 1', '$')

    empty = StructSchemaType(NoFields())
    assert empty.json_to_bytes({}) == b''


def test_nested_error_path() -> None:
    schema_type = StructSchemaType(NamedFields([('items', ListSchemaType(SizeLength.U8, U8SchemaType()))]))
    with pytest.raises(JsonParameterError) as exc_info:
        schema_type.json_to_bytes({'items': [1, 256]})
    assert exc_info.value.format_path() == '$.items[1]'
    assert exc_info.value.verbose_message() == '256 is out of range for u8 at $.items[1], got: 256'


def test_enum() -> None:
    schema_type = EnumSchemaType([('A', NoFields()), ('B', UnnamedFields([U8SchemaType()]))])
    assert schema_type.json_to_bytes({'A': {}}).hex() == '00'
    assert schema_type.json_to_bytes({'B': [7]}).hex() == '0107'
    assert _reason(schema_type, {'C': []}) == ("unknown variant 'C'", '$')
    assert _reason(schema_type, {'A': {}, 'B': [7]}) == (
        'expected a JSON object with exactly one key, the variant name',
        '$',
    )
    assert _reason(schema_type, {'B': [256]}) == ('256 is out of range for u8', '$.B[0]')


def test_enum_with_many_variants() -> None:
    schema_type = EnumSchemaType([(f'V{i}', NoFields()) for i in range(257)])
    assert schema_type.json_to_bytes({'V1': {}}).hex() == '0100'
    assert schema_type.json_to_bytes({'V256': {}}).hex() == '0001'

    schema_type = EnumSchemaType([(f'V{i}', NoFields()) for i in range(256)])
    assert schema_type.json_to_bytes({'V255': {}}).hex() == 'ff'

    schema_type = EnumSchemaType([(f'V{i}', NoFields()) for i in range(65537)])
    assert _reason(schema_type, {'V1': {}}) == ('enum has 65537 variants, at most 65536 are supported', '$')


def test_tagged_enum() -> None:
    schema_type = TaggedEnumSchemaType({
        9: ('X', NoFields()),
        3: ('Y', UnnamedFields([U8SchemaType()])),
    })
    assert schema_type.json_to_bytes({'X': []}).hex() == '09'
    assert schema_type.json_to_bytes({'Y': [3]}).hex() == '0303'
    assert _reason(schema_type, {'Z': []}) == ("unknown variant 'Z'", '$')


def test_strings() -> None:
    assert StringSchemaType(SizeLength.U8).json_to_bytes('hi').hex() == '026869'
    assert StringSchemaType(SizeLength.U16).json_to_bytes('π').hex() == '0200cf80'
    assert _reason(StringSchemaType(SizeLength.U8), 1) == ('expected a JSON string', '$')
    assert _reason(StringSchemaType(SizeLength.U8), '\ud800') == (
        'string is not valid unicode, it has a lone surrogate',
        '$',
    )


def test_contract_name() -> None:
    schema_type = ContractNameSchemaType(SizeLength.U16)
    assert schema_type.json_to_bytes({'contract': 'c'}).hex() == '0600696e69745f63'
    assert _reason(schema_type, {'contract': 'a.b'}) == ('contract name \'a.b\' cannot contain "."', '$')
    assert _reason(schema_type, {}) == ("missing field 'contract'", '$')
    assert _reason(schema_type, {'contract': 1}) == ('expected a JSON string', '$.contract')


def test_receive_name() -> None:
    schema_type = ReceiveNameSchemaType(SizeLength.U16)
    assert schema_type.json_to_bytes({'contract': 'c', 'func': 'f'}).hex() == '0300632e66'
    # the function name may contain dots
    assert schema_type.json_to_bytes({'contract': 'c', 'func': 'f.g'}).hex() == '0500632e662e67'
    assert _reason(schema_type, {'contract': 'c'}) == ("missing field 'func'", '$')
    assert _reason(schema_type, {'contract': 'c', 'func': 'with space'}) == (
        "'c.with space' must only have ASCII alphanumeric or punctuation characters",
        '$',
    )


def test_leb128() -> None:
    assert ULeb128SchemaType(5).json_to_bytes('300').hex() == 'ac02'
    assert ILeb128SchemaType(5).json_to_bytes('-1').hex() == '7f'
    assert ILeb128SchemaType(5).json_to_bytes('-128').hex() == '807f'
    assert _reason(ULeb128SchemaType(1), '128') == ('128 does not fit in 1 LEB128 byte(s)', '$')
    assert _reason(ULeb128SchemaType(5), '-1') == ('-1 is negative, expected an unsigned integer', '$')
    assert _reason(ULeb128SchemaType(5), 300) == ('expected a JSON string with a decimal integer', '$')
    assert _reason(ULeb128SchemaType(37), '1' * 5000) == ('decimal integer with 5000 characters is too long', '$')


def test_bytes() -> None:
    assert ByteListSchemaType(SizeLength.U8).json_to_bytes('dead').hex() == '02dead'
    assert ByteListSchemaType(SizeLength.U32).json_to_bytes('').hex() == '00000000'
    assert ByteArraySchemaType(2).json_to_bytes('beef').hex() == 'beef'
    assert _reason(ByteArraySchemaType(2), 'be') == ('expected exactly 2 bytes, got 1', '$')
    assert _reason(ByteListSchemaType(SizeLength.U8), 'xyz') == ("'xyz' is not valid hex", '$')
    assert _reason(ByteListSchemaType(SizeLength.U8), 'de ad') == ("'de ad' is not valid hex", '$')
    assert _reason(ByteListSchemaType(SizeLength.U8), 'dea') == ("'dea' is not valid hex", '$')


def test_to_json_schema() -> None:
    schema_type = MapSchemaType(SizeLength.U32, StringSchemaType(SizeLength.U8), ListSchemaType(
        SizeLength.U16,
        U32SchemaType(),
    ))
    assert schema_type.to_json_schema() == {
        'type': 'map',
        'size_length': 'u32',
        'key': {'type': 'string', 'size_length': 'u8'},
        'value': {'type': 'list', 'size_length': 'u16', 'item': 'u32'},
    }
    enum = EnumSchemaType([('A', NoFields()), ('B', NamedFields([('x', U8SchemaType())]))])
    assert enum.to_json_schema() == {'type': 'enum', 'variants': {'A': None, 'B': {'x': 'u8'}}}
