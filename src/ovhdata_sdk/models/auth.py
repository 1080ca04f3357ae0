"""
Account and credential records
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .utils import require_bool, require_int, require_object, require_str, str_list


@dataclass
class Me:
    """Details of the authenticated account (/auth/details)"""
    user: Optional[str] = None
    description: Optional[str] = None
    roles: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Me':
        data = require_object(data)
        return cls(
            user=data.get('user'),
            description=data.get('description'),
            roles=str_list(data['roles']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'user': self.user,
            'description': self.description,
            'roles': list(self.roles),
        }


@dataclass
class AccessRule:
    """Route allowed to a credential"""
    method: str
    path: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AccessRule':
        data = require_object(data)
        return cls(method=require_str(data, 'method'), path=require_str(data, 'path'))

    def to_dict(self) -> Dict[str, Any]:
        return {'method': self.method, 'path': self.path}


@dataclass
class CredentialDetails:
    """
    Details of the consumer key in use (/auth/currentCredential)

    Attributes:
        application_id: Id of the application the key belongs to
        credential_id: Id of the credential
        creation: Creation date as sent by the API
        status: Validation status, e.g. "validated"
        ovh_support: Whether the credential was created by OVH support
        allowed_ips: IP restrictions, empty when unrestricted
        expiration: Expiration date, if any
        last_use: Last use date, if any
        rules: Routes this credential can call
    """
    application_id: int
    credential_id: int
    creation: str
    status: str
    ovh_support: bool
    allowed_ips: List[str] = field(default_factory=list)
    expiration: Optional[str] = None
    last_use: Optional[str] = None
    rules: List[AccessRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CredentialDetails':
        data = require_object(data)
        return cls(
            application_id=require_int(data, 'applicationId'),
            credential_id=require_int(data, 'credentialId'),
            creation=require_str(data, 'creation'),
            status=require_str(data, 'status'),
            ovh_support=require_bool(data, 'ovhSupport'),
            allowed_ips=str_list(data.get('allowedIps') or []),
            expiration=data.get('expiration'),
            last_use=data.get('lastUse'),
            rules=[AccessRule.from_dict(rule) for rule in data.get('rules') or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'applicationId': self.application_id,
            'creation': self.creation,
            'credentialId': self.credential_id,
            'expiration': self.expiration,
            'lastUse': self.last_use,
            'ovhSupport': self.ovh_support,
            'status': self.status,
        }
        if self.allowed_ips:
            result['allowedIps'] = list(self.allowed_ips)
        if self.rules:
            result['rules'] = [rule.to_dict() for rule in self.rules]
        return result
