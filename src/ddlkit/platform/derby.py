"""
Apache Derby platform.

Derby speaks the DB2 dialect for everything ddlkit renders.
"""

from ..model import TypeCode
from .db2 import Db2Builder, Db2Platform
from .info import PlatformInfo


class DerbyPlatform(Db2Platform):
    NAME = "Derby"
    URL_SCHEMES = ("derby",)

    builder_class = Db2Builder

    def init_platform_info(self, info: PlatformInfo) -> None:
        super().init_platform_info(info)
        info.max_identifier_length = 128
        info.add_native_type_mapping(TypeCode.DATALINK, "LONG VARCHAR FOR BIT DATA", TypeCode.LONGVARBINARY)
