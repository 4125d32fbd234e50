"""
Plaid identity verification: response schema and the `identity_verification/get` call.

Every field of every record is optional. A field missing from the response is `None`, unknown fields are
dropped, and a nested value of the wrong shape (e.g. a string where an object is expected) is treated as missing.
"""
from dataclasses import dataclass, fields
from typing import Dict, List, Mapping, Optional

from plaid_idv.rpc import ensure_slots
from plaid_idv.rpc.http import Client, HttpRpc, Request
from plaid_idv.utils.jsonable import JSONSerializable


def _make_one(cls, value):
    return cls.make(value) if isinstance(value, dict) else None


def _make_list(cls, value):
    if not isinstance(value, list):
        return None
    return [cls.make(x) for x in value if isinstance(x, dict)]


def _encode(value):
    if isinstance(value, JSONSerializable):
        return value.__json_encode__()
    if isinstance(value, list):
        return [_encode(x) for x in value]
    return value


class Record(JSONSerializable):
    """base of all schema records. leaf records use `make` as is, composite records override it."""

    @classmethod
    def make(cls, dct: Dict):
        return cls(**ensure_slots(cls, dct))

    def __json_encode__(self) -> Dict:
        """absent fields are omitted, so that `make(record.__json_encode__()) == record`"""
        return {f.name: _encode(getattr(self, f.name)) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class Template(Record):
    id: Optional[str] = None
    version: Optional[int] = None


@dataclass(frozen=True)
class Name(Record):
    given_name: Optional[str] = None
    family_name: Optional[str] = None


@dataclass(frozen=True)
class Address(Record):
    street: Optional[str] = None
    street2: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class IDNumber(Record):
    value: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class User(Record):
    phone_number: Optional[str] = None
    date_of_birth: Optional[str] = None
    ip_address: Optional[str] = None
    email_address: Optional[str] = None
    name: Optional[Name] = None
    address: Optional[Address] = None
    id_number: Optional[IDNumber] = None

    @classmethod
    def make(cls, dct: Dict) -> "User":
        dct = ensure_slots(cls, dct)
        dct['name'] = _make_one(Name, dct.get('name'))
        dct['address'] = _make_one(Address, dct.get('address'))
        dct['id_number'] = _make_one(IDNumber, dct.get('id_number'))
        return cls(**dct)


@dataclass(frozen=True)
class Steps(Record):
    """status of each step of the verification flow"""
    accept_tos: Optional[str] = None
    verify_sms: Optional[str] = None
    kyc_check: Optional[str] = None
    documentary_verification: Optional[str] = None
    selfie_check: Optional[str] = None
    watchlist_screening: Optional[str] = None
    risk_check: Optional[str] = None


@dataclass(frozen=True)
class Images(Record):
    original_front: Optional[str] = None
    original_back: Optional[str] = None
    cropped_front: Optional[str] = None
    cropped_back: Optional[str] = None
    face: Optional[str] = None


@dataclass(frozen=True)
class ExtractedData(Record):
    """fields read from the document by OCR"""
    id_number: Optional[str] = None
    category: Optional[str] = None
    expiration_date: Optional[str] = None
    issuing_country: Optional[str] = None
    issuing_region: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[Address] = None

    @classmethod
    def make(cls, dct: Dict) -> "ExtractedData":
        dct = ensure_slots(cls, dct)
        dct['address'] = _make_one(Address, dct.get('address'))
        return cls(**dct)


@dataclass(frozen=True)
class DocumentAnalysis(Record):
    authenticity: Optional[str] = None
    image_quality: Optional[str] = None
    extracted_data: Optional[ExtractedData] = None

    @classmethod
    def make(cls, dct: Dict) -> "DocumentAnalysis":
        dct = ensure_slots(cls, dct)
        dct['extracted_data'] = _make_one(ExtractedData, dct.get('extracted_data'))
        return cls(**dct)


@dataclass(frozen=True)
class Document(Record):
    status: Optional[str] = None
    attempt: Optional[int] = None
    images: Optional[Images] = None
    extracted_data: Optional[ExtractedData] = None
    analysis: Optional[DocumentAnalysis] = None
    redacted_at: Optional[str] = None

    @classmethod
    def make(cls, dct: Dict) -> "Document":
        dct = ensure_slots(cls, dct)
        dct['images'] = _make_one(Images, dct.get('images'))
        dct['extracted_data'] = _make_one(ExtractedData, dct.get('extracted_data'))
        dct['analysis'] = _make_one(DocumentAnalysis, dct.get('analysis'))
        return cls(**dct)


@dataclass(frozen=True)
class DocumentaryVerification(Record):
    status: Optional[str] = None
    documents: Optional[List[Document]] = None

    @classmethod
    def make(cls, dct: Dict) -> "DocumentaryVerification":
        dct = ensure_slots(cls, dct)
        dct['documents'] = _make_list(Document, dct.get('documents'))
        return cls(**dct)


@dataclass(frozen=True)
class Capture(Record):
    image_url: Optional[str] = None
    video_url: Optional[str] = None


@dataclass(frozen=True)
class SelfieAnalysis(Record):
    document_comparison: Optional[str] = None


@dataclass(frozen=True)
class Selfie(Record):
    status: Optional[str] = None
    attempt: Optional[int] = None
    capture: Optional[Capture] = None
    analysis: Optional[SelfieAnalysis] = None

    @classmethod
    def make(cls, dct: Dict) -> "Selfie":
        dct = ensure_slots(cls, dct)
        dct['capture'] = _make_one(Capture, dct.get('capture'))
        dct['analysis'] = _make_one(SelfieAnalysis, dct.get('analysis'))
        return cls(**dct)


@dataclass(frozen=True)
class SelfieCheck(Record):
    status: Optional[str] = None
    selfies: Optional[List[Selfie]] = None

    @classmethod
    def make(cls, dct: Dict) -> "SelfieCheck":
        dct = ensure_slots(cls, dct)
        dct['selfies'] = _make_list(Selfie, dct.get('selfies'))
        return cls(**dct)


@dataclass(frozen=True)
class KYCAddress(Record):
    summary: Optional[str] = None
    po_box: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class KYCName(Record):
    summary: Optional[str] = None


@dataclass(frozen=True)
class KYCDOB(Record):
    summary: Optional[str] = None


@dataclass(frozen=True)
class KYCIDNumber(Record):
    summary: Optional[str] = None


@dataclass(frozen=True)
class KYCPhoneNumber(Record):
    summary: Optional[str] = None
    area_code: Optional[str] = None


@dataclass(frozen=True)
class KYCCheck(Record):
    """match summaries of the user data against identity databases"""
    status: Optional[str] = None
    address: Optional[KYCAddress] = None
    name: Optional[KYCName] = None
    date_of_birth: Optional[KYCDOB] = None
    id_number: Optional[KYCIDNumber] = None
    phone_number: Optional[KYCPhoneNumber] = None

    @classmethod
    def make(cls, dct: Dict) -> "KYCCheck":
        dct = ensure_slots(cls, dct)
        dct['address'] = _make_one(KYCAddress, dct.get('address'))
        dct['name'] = _make_one(KYCName, dct.get('name'))
        dct['date_of_birth'] = _make_one(KYCDOB, dct.get('date_of_birth'))
        dct['id_number'] = _make_one(KYCIDNumber, dct.get('id_number'))
        dct['phone_number'] = _make_one(KYCPhoneNumber, dct.get('phone_number'))
        return cls(**dct)


@dataclass(frozen=True)
class Behavior(Record):
    user_interactions: Optional[str] = None
    fraud_ring_detected: Optional[str] = None
    bot_detected: Optional[str] = None


@dataclass(frozen=True)
class Email(Record):
    is_deliverable: Optional[str] = None
    breach_count: Optional[int] = None
    first_breached_at: Optional[str] = None
    last_breached_at: Optional[str] = None
    domain_registered_at: Optional[str] = None
    domain_is_free_provider: Optional[str] = None
    domain_is_custom: Optional[str] = None
    domain_is_disposable: Optional[str] = None
    top_level_domain_is_suspicious: Optional[str] = None
    linked_services: Optional[List[str]] = None


@dataclass(frozen=True)
class Phone(Record):
    linked_services: Optional[List[str]] = None


@dataclass(frozen=True)
class Device(Record):
    ip_proxy_type: Optional[str] = None
    ip_spam_list_count: Optional[int] = None
    ip_timezone_offset: Optional[str] = None


@dataclass(frozen=True)
class SyntheticIdentity(Record):
    score: Optional[int] = None


@dataclass(frozen=True)
class StolenIdentity(Record):
    score: Optional[int] = None


@dataclass(frozen=True)
class IdentityAbuseSignals(Record):
    synthetic_identity: Optional[SyntheticIdentity] = None
    stolen_identity: Optional[StolenIdentity] = None

    @classmethod
    def make(cls, dct: Dict) -> "IdentityAbuseSignals":
        dct = ensure_slots(cls, dct)
        dct['synthetic_identity'] = _make_one(SyntheticIdentity, dct.get('synthetic_identity'))
        dct['stolen_identity'] = _make_one(StolenIdentity, dct.get('stolen_identity'))
        return cls(**dct)


@dataclass(frozen=True)
class RiskCheck(Record):
    status: Optional[str] = None
    behavior: Optional[Behavior] = None
    email: Optional[Email] = None
    phone: Optional[Phone] = None
    devices: Optional[List[Device]] = None
    identity_abuse_signals: Optional[IdentityAbuseSignals] = None

    @classmethod
    def make(cls, dct: Dict) -> "RiskCheck":
        dct = ensure_slots(cls, dct)
        dct['behavior'] = _make_one(Behavior, dct.get('behavior'))
        dct['email'] = _make_one(Email, dct.get('email'))
        dct['phone'] = _make_one(Phone, dct.get('phone'))
        dct['devices'] = _make_list(Device, dct.get('devices'))
        dct['identity_abuse_signals'] = _make_one(IdentityAbuseSignals, dct.get('identity_abuse_signals'))
        return cls(**dct)


@dataclass(frozen=True)
class IdentityVerification(Record):
    """one identity verification attempt and the result of all its checks"""
    id: Optional[str] = None
    client_user_id: Optional[str] = None
    created_at: Optional[str] = None
    completed_at: Optional[str] = None
    previous_attempt_id: Optional[str] = None
    shareable_url: Optional[str] = None
    template: Optional[Template] = None
    user: Optional[User] = None
    status: Optional[str] = None
    steps: Optional[Steps] = None
    documentary_verification: Optional[DocumentaryVerification] = None
    selfie_check: Optional[SelfieCheck] = None
    kyc_check: Optional[KYCCheck] = None
    risk_check: Optional[RiskCheck] = None
    watchlist_screening_id: Optional[str] = None
    redacted_at: Optional[str] = None
    request_id: Optional[str] = None

    @classmethod
    def make(cls, dct: Dict) -> "IdentityVerification":
        dct = ensure_slots(cls, dct)
        dct['template'] = _make_one(Template, dct.get('template'))
        dct['user'] = _make_one(User, dct.get('user'))
        dct['steps'] = _make_one(Steps, dct.get('steps'))
        dct['documentary_verification'] = _make_one(DocumentaryVerification, dct.get('documentary_verification'))
        dct['selfie_check'] = _make_one(SelfieCheck, dct.get('selfie_check'))
        dct['kyc_check'] = _make_one(KYCCheck, dct.get('kyc_check'))
        dct['risk_check'] = _make_one(RiskCheck, dct.get('risk_check'))
        return cls(**dct)


class IdentityVerificationAPI:
    ENDPOINT = 'identity_verification/get'

    def __init__(self, rpc=None):
        """
        :param rpc: default collaborator with `send_request` and `handle_response`, `HttpRpc()` if omitted
        """
        self.rpc = rpc if rpc is not None else HttpRpc()

    def get(self, params: Mapping, config: Mapping = None) -> IdentityVerification:
        """
        retrieve an identity verification

        :param params: request body, e.g. `{"identity_verification_id": "idv_..."}`
        :param config: per-call config. `client` overrides the collaborator of this call, the other keys are read by
                       `Request.add_metadata` and `Client.new`
        :return: the mapped `IdentityVerification`
        :raise TransportError: the call failed, nothing is mapped
        :raise MappingError: the response body is not a JSON object
        """
        config = config or {}
        c = config.get('client') or self.rpc

        request = Request(method='POST', endpoint=self.ENDPOINT, body=dict(params)).add_metadata(config)
        client = Client.new(config)
        try:
            response = c.send_request(request, client)
            return c.handle_response(response, IdentityVerification.make)
        finally:
            client.session.close()


def get(params: Mapping, config: Mapping = None) -> IdentityVerification:
    return IdentityVerificationAPI().get(params, config)
