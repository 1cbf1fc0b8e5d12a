import base64
import io
import struct
import zipfile

from datamashup.container.container import DEFAULT_PERMISSIONS


FORMULA = 'section Section1;\r\n\r\nshared Query1 = let\r\n    Source = "This is an example."\r\nin\r\n    Source;'

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="m" ContentType="application/x-ms-m" /></Types>'
)

PACKAGE_XML = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<Package xmlns="http://schemas.microsoft.com/DataMashup"><Version>1.0.0.0</Version></Package>'
)

METADATA_XML = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<LocalPackageMetadataFile xmlns:xsd="http://www.w3.org/2001/XMLSchema">'
    '<Items><Item><ItemLocation><ItemType>Formula</ItemType>'
    '<ItemPath>Section1/Query1</ItemPath></ItemLocation></Item></Items>'
    '</LocalPackageMetadataFile>'
)

SIGNED_PERMISSIONS = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<PermissionList xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
    '<CanEvaluateFuturePackages>true</CanEvaluateFuturePackages>'
    '<FirewallEnabled>false</FirewallEnabled></PermissionList>'
)

BINDINGS = bytes(range(40))


def build_zip(files: dict) -> bytes:
    out = io.BytesIO()
    with zipfile.ZipFile(out, 'w', zipfile.ZIP_DEFLATED) as thezip:
        for name, data in files.items():
            if isinstance(data, str):
                data = data.encode('utf-8')
            thezip.writestr(name, data)
    return out.getvalue()


def prefixed(data: bytes) -> bytes:
    return struct.pack('<I', len(data)) + data


def build_metadata(version=0, metadata_xml=METADATA_XML, content=None) -> bytes:
    if content is None:
        content = build_zip({'Formulas/Section1.m.xml': '<Formula />'})
    return struct.pack('<I', version) + prefixed(metadata_xml.encode('utf-8')) + prefixed(content)


def build_package_parts(formula=FORMULA, extra=None) -> bytes:
    files = {
        '[Content_Types].xml': CONTENT_TYPES,
        'Config/Package.xml': PACKAGE_XML,
    }
    if formula is not None:
        files['Formulas/Section1.m'] = formula
    files.update(extra or {})
    return build_zip(files)


def build_root(version=0, package_parts=None, permissions=SIGNED_PERMISSIONS,
               metadata=None, bindings=BINDINGS) -> bytes:
    if package_parts is None:
        package_parts = build_package_parts()
    if metadata is None:
        metadata = build_metadata()
    return (
        struct.pack('<I', version)
        + prefixed(package_parts)
        + prefixed(permissions.encode('utf-8'))
        + prefixed(metadata)
        + prefixed(bindings)
    )


def wrap_xml(payload: str) -> str:
    return (
        '<?xml version="1.0" encoding="utf-16"?>'
        '<DataMashup xmlns="http://schemas.microsoft.com/DataMashup">'
        + payload +
        '</DataMashup>'
    )


def build_xml(root: bytes = None) -> str:
    if root is None:
        root = build_root()
    return wrap_xml(base64.b64encode(root).decode('ascii'))


def build_workbook(custom_xml: str = None, encoding='utf-16-le', bom=True) -> bytes:
    files = {
        '[Content_Types].xml': '<Types />',
        'xl/workbook.xml': '<workbook />',
        'xl/worksheets/sheet1.xml': '<worksheet />',
        'customXml/item2.xml': '<b:Sources xmlns:b="bibliography" />',
    }
    if custom_xml is not None:
        data = custom_xml.encode(encoding)
        if bom and encoding == 'utf-16-le':
            data = b'\xff\xfe' + data
        files['customXml/item1.xml'] = data
    return build_zip(files)


def zero_first_name_length(data: bytes) -> bytes:
    """Zero the file name length of the first central directory record"""
    offset = data.index(b'PK\x01\x02')
    return data[:offset + 28] + b'\x00\x00' + data[offset + 30:]


def read_zip(data: bytes) -> dict:
    with zipfile.ZipFile(io.BytesIO(data)) as thezip:
        return {name: thezip.read(name) for name in thezip.namelist()}


__all__ = [
    "FORMULA",
    "METADATA_XML",
    "SIGNED_PERMISSIONS",
    "DEFAULT_PERMISSIONS",
    "BINDINGS",
    "build_zip",
    "prefixed",
    "build_metadata",
    "build_package_parts",
    "build_root",
    "wrap_xml",
    "build_xml",
    "build_workbook",
    "zero_first_name_length",
    "read_zip"
]
