import typing

JSONScalar = typing.Union[bool, int, float, str]
JSONArray = typing.Sequence[typing.Any]
JSONObject = typing.Mapping[str, typing.Any]
MutableJSONObject = typing.MutableMapping[str, typing.Any]
JSONValue = typing.Union[JSONScalar, JSONArray, JSONObject, None]

RawLink = typing.Mapping[str, str]
RawLinks = typing.MutableMapping[str, typing.Optional[RawLink]]
RawResource = MutableJSONObject
Payload = typing.Dict[str, typing.Any]
