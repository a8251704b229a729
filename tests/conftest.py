import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# app.py configures folders at import time
_RUNTIME_DIR = tempfile.mkdtemp(prefix='comparexsd-tests-')
os.environ.setdefault('COMPAREXSD_OUTPUT_FOLDER', os.path.join(_RUNTIME_DIR, 'outputs'))
os.environ.setdefault('COMPAREXSD_LOG_FOLDER', os.path.join(_RUNTIME_DIR, 'logs'))
os.environ.setdefault('COMPAREXSD_CONFIG_FILE', os.path.join(_RUNTIME_DIR, 'missing-config.json'))

ROOT = '/Document/BkToCstmrDbtCdtNtfctn'

SCHEMA_TEMPLATE = '''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           xmlns="urn:iso:std:iso:20022:tech:xsd:camt.054.001.08"
           {target}elementFormDefault="qualified">
{body}
</xs:schema>
'''

TARGET_NAMESPACE = 'targetNamespace="urn:iso:std:iso:20022:tech:xsd:camt.054.001.08" '

NOTIFICATION_BODY = '''
  <xs:element name="Document" type="Document"/>
  <xs:complexType name="Document">
    <xs:sequence>
      <xs:element name="BkToCstmrDbtCdtNtfctn" type="BankToCustomerDebitCreditNotificationV08"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="BankToCustomerDebitCreditNotificationV08">
    <xs:sequence>
      <xs:element name="GrpHdr" type="GroupHeader81"/>
      <xs:element name="Ntfctn" type="AccountNotification17" minOccurs="0"/>
      <xs:element name="SplmtryData" type="Max350Text" minOccurs="0"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="GroupHeader81">
    <xs:sequence>
      <xs:element name="MsgId" type="Max35Text"/>
      <xs:element name="CreDtTm" type="ISODateTime"/>
      <xs:element name="MsgRcpt" type="PartyIdentification135" minOccurs="0"/>
      <xs:element name="AddtlInf" type="Max500Text" minOccurs="0"/>
      <xs:element name="Pgntn">
        <xs:complexType>
          <xs:sequence>
            <xs:element name="PgNb" type="Max5NumericText"/>
            <xs:element name="LastPgInd" type="YesNoIndicator" minOccurs="0"/>
          </xs:sequence>
        </xs:complexType>
      </xs:element>
    </xs:sequence>
    <xs:choice>
      <xs:element name="Ustrd" type="Max140Text"/>
      <xs:element name="Strd" type="StructuredRemittanceInformation16"/>
    </xs:choice>
  </xs:complexType>
  <xs:complexType name="PartyIdentification135">
    <xs:sequence>
      <xs:element name="Nm" type="Max140Text"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="StructuredRemittanceInformation16">
    <xs:sequence>
      <xs:element name="RfrdDocInf" type="Max35Text"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="AccountNotification17">
    <xs:sequence>
      <xs:element name="Id" type="Max35Text"/>
      <xs:element name="Acct" type="CashAccount39"/>
    </xs:sequence>
    <xs:choice>
      <xs:element name="CdtDbtInd" type="CreditDebitCode"/>
      <xs:element name="Amt" type="ActiveOrHistoricCurrencyAndAmount"/>
    </xs:choice>
  </xs:complexType>
  <xs:complexType name="CashAccount39">
    <xs:sequence>
      <xs:element name="Ccy" type="ActiveOrHistoricCurrencyCode"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="ActiveOrHistoricCurrencyAndAmount">
    <xs:sequence>
      <xs:element name="Value" type="DecimalNumber"/>
    </xs:sequence>
  </xs:complexType>
  <xs:simpleType name="Max35Text">
    <xs:restriction base="xs:string">
      <xs:minLength value="1"/>
      <xs:maxLength value="35"/>
    </xs:restriction>
  </xs:simpleType>
  <xs:simpleType name="CreditDebitCode">
    <xs:restriction base="xs:string">
      <xs:enumeration value="CRDT"/>
      <xs:enumeration value="DBIT"/>
    </xs:restriction>
  </xs:simpleType>
'''

NOTIFICATION_PATHS = [
    (f'{ROOT}/GrpHdr/MsgId', 1),
    (f'{ROOT}/GrpHdr/CreDtTm', 1),
    (f'{ROOT}/GrpHdr/MsgRcpt/Nm', 2),
    (f'{ROOT}/GrpHdr/AddtlInf', 2),
    (f'{ROOT}/GrpHdr/Pgntn', 1),
    (f'{ROOT}/GrpHdr/Pgntn/PgNb', 1),
    (f'{ROOT}/GrpHdr/Pgntn/LastPgInd', 2),
    (f'{ROOT}/GrpHdr/Ustrd', 2),
    (f'{ROOT}/GrpHdr/Strd/RfrdDocInf', 2),
    (f'{ROOT}/Ntfctn/Id', 2),
    (f'{ROOT}/Ntfctn/Acct/Ccy', 2),
    (f'{ROOT}/Ntfctn/CdtDbtInd', 2),
    (f'{ROOT}/Ntfctn/Amt/Value', 2),
    (f'{ROOT}/SplmtryData', 2),
]

MINIMAL_BODY = '''
  <xs:element name="Document" type="DocumentType"/>
  <xs:complexType name="DocumentType">
    <xs:sequence>
      <xs:element name="BkToCstmrDbtCdtNtfctn" type="MessageType"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="MessageType">
    <xs:sequence>
      <xs:element name="GrpHdr" type="GroupHeader"/>
    </xs:sequence>
  </xs:complexType>
  <xs:complexType name="GroupHeader">
    <xs:sequence>
      <xs:element name="MsgId" type="xs:string"/>
    </xs:sequence>
  </xs:complexType>
'''


def build_schema(body, target=TARGET_NAMESPACE):
    return SCHEMA_TEMPLATE.format(target=target, body=body)


def sql_row(path, required):
    return (
        "insert into msg_field_map (xpath, column_name, required) "
        f"values ('{path}', 'FIELD', {required});"
    )


def build_sql(entries):
    return '\n'.join(sql_row(path, required) for path, required in entries) + '\n'


@pytest.fixture
def make_schema():
    return build_schema


@pytest.fixture
def make_sql():
    return build_sql


@pytest.fixture
def notification_xsd():
    return build_schema(NOTIFICATION_BODY)


@pytest.fixture
def notification_paths():
    return list(NOTIFICATION_PATHS)


@pytest.fixture
def notification_sql():
    return build_sql(NOTIFICATION_PATHS)


@pytest.fixture
def minimal_xsd():
    return build_schema(MINIMAL_BODY)
