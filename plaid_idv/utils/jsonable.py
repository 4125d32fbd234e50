import abc
import json
from typing import Dict


class JSONSerializable:
    """schema records implement this to be dumped by `to_json`"""

    @abc.abstractmethod
    def __json_encode__(self) -> Dict:
        pass


class RecordEncoder(json.JSONEncoder):
    """JSON encoder that turns records (and lists of them) into their wire dicts"""

    def default(self, obj):
        if isinstance(obj, JSONSerializable):
            return obj.__json_encode__()
        return super().default(obj)


def to_json(obj, **kwargs) -> str:
    """dump a record tree, absent fields are left out

    >>> from plaid_idv.rpc.identity_verification import Template
    >>> to_json(Template(id="idvtmp_4FrXJvfQU3zGUR", version=2))
    '{"id": "idvtmp_4FrXJvfQU3zGUR", "version": 2}'
    >>> to_json(Template(id="idvtmp_4FrXJvfQU3zGUR"))
    '{"id": "idvtmp_4FrXJvfQU3zGUR"}'
    """
    return json.dumps(obj, cls=RecordEncoder, **kwargs)
