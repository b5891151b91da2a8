"""Catalogue of the entity screens listed under User menu > Manage."""

from harness.models.schemas import EntityData, ManageCategory


def _entity(name: str, url: str, link_name: str | None = None, exact_link: bool = False) -> EntityData:
    return EntityData(name=name, link_name=link_name or name, url=url, exact_link=exact_link)


MANAGE_ENTITIES: list[ManageCategory] = [
    ManageCategory(
        category="MANAGE",
        entities=[
            _entity("Portal Companies", "/manage/portal-companies"),
            # "Companies" is a substring of "Portal Companies"
            _entity("Companies", "/manage/companies", exact_link=True),
            _entity("Employees", "/manage/employees"),
            _entity("Roles", "/manage/roles"),
            _entity("Permissions", "/manage/permissions"),
            _entity("Feature Flags", "/manage/feature-flag"),
            _entity("Base Company Settings", "/manage/company-settings"),
            _entity("User Settings", "/manage/user-settings"),
            _entity("Counters", "/manage/counters"),
            _entity("Document Creator Templates", "/manage/document-templates"),
            _entity("Process Flows", "/manage/process-flows"),
            _entity("Document Generator", "/manage/document-generator"),
            _entity("Plugins", "/manage/plugins"),
            _entity("Category", "/manage/categories", link_name="Categories"),
        ],
    ),
    ManageCategory(
        category="CHARGE",
        entities=[
            _entity("Charge Items", "/manage/charge-item"),
            _entity("Charge Categories", "/manage/charge-category"),
            _entity("Quotations", "/manage/quotation"),
            # "Rates" is a substring of "FAF Rates" and "Exchange Rates"
            _entity("Rates", "/manage/rate", exact_link=True),
            _entity("Holidays", "/manage/holiday"),
        ],
    ),
    ManageCategory(
        category="TRANSPORT",
        entities=[
            _entity("Booking Types", "/manage/booking-type"),
            _entity("Job Types", "/manage/job-type"),
            _entity("Incentive Types", "/manage/incentive-type"),
            _entity("Staging Yards", "/manage/staging-yard"),
            _entity("Transport Area Codes", "/manage/transport-area-code"),
            _entity("Transport Zones", "/manage/transport-zone"),
            _entity("FAF Rates", "/manage/faf-rate"),
        ],
    ),
    ManageCategory(
        category="FINANCE",
        entities=[
            _entity("Taxes", "/manage/tax"),
            _entity("Currencies", "/manage/currency"),
            _entity("Exchange Rates", "/manage/exchange-rate"),
            _entity("GL Codes", "/manage/gl-code"),
            _entity("Billing Units", "/manage/billing-unit"),
            _entity("Period Closings", "/manage/period-closing"),
        ],
    ),
    ManageCategory(
        category="INTEGRATE",
        entities=[
            _entity("Mappings", "/manage/mapping"),
            _entity("Details", "/manage/detail"),
            _entity("Logs", "/manage/log"),
            _entity("Bulk Import Functions", "/manage/bulk-import-function"),
        ],
    ),
    ManageCategory(
        category="LOGS",
        entities=[
            _entity("Vouchers", "/manage/voucher"),
            _entity("Etc", "/manage/etc"),
            _entity("Email", "/manage/email"),
            _entity("Webhook", "/manage/webhook"),
        ],
    ),
]


def get_all_manage_entities() -> list[EntityData]:
    return [entity for category in MANAGE_ENTITIES for entity in category.entities]


def get_manage_entity_by_name(name: str) -> EntityData | None:
    return next((e for e in get_all_manage_entities() if e.name == name), None)
