"""Events schema package.

Schemas are grouped by concern and re-exported here.
"""

from .admin import (
    DashboardPeriod,
    DashboardSchema,
    DashboardSummarySchema,
    DailyCheckInsSchema,
    EnrichDetailSchema,
    EnrichResultSchema,
    EnrichSchema,
    EventExportFilterSchema,
    EventReportRowSchema,
    ExportFormat,
    ImportResultSchema,
    ImportRowSchema,
    ImportSchema,
    ParticipantReportRowSchema,
    RecentCheckInSchema,
    ReportFilterSchema,
    ReportFormat,
    ReportSchema,
    ReportType,
    SASSyncResultSchema,
    SASSyncSchema,
    SASVerifyParticipantSchema,
    SASVerifyResultSchema,
    SASVerifySchema,
    TaskQueuedSchema,
    TopCompanySchema,
    TopEventSchema,
)
from .checkin import (
    CheckinEventSearchSchema,
    CheckinParticipantSchema,
    CheckinRegisterResponse,
    CheckinRegisterSchema,
    CheckinSearchSchema,
    ExistingCheckinResponse,
    FourEventsCheckResponse,
    FourEventsCheckSchema,
    FourEventsRegisterResponse,
    FourEventsRegisterSchema,
    SASEventItemSchema,
    WebhookCallbackResponse,
    WebhookCallbackSchema,
)
from .company import (
    CompanyEditSchema,
    CompanySchema,
    CompanySearchResponse,
    CompanySearchSchema,
    MinimalCompanySchema,
)
from .event import (
    EventCreateSchema,
    EventEditSchema,
    EventReportParticipantSchema,
    EventReportSchema,
    EventSchema,
    EventStatsSchema,
    MinimalEventSchema,
)
from .participant import (
    CheckInSchema,
    CredenciarSchema,
    CredentialedParticipantSchema,
    ParticipantCreateSchema,
    ParticipantEditSchema,
    ParticipantEventEntrySchema,
    ParticipantReportSchema,
    ParticipantSchema,
    RegistrationSchema,
)

__all__ = [
    # Admin
    "DashboardPeriod",
    "DashboardSchema",
    "DashboardSummarySchema",
    "DailyCheckInsSchema",
    "EnrichDetailSchema",
    "EnrichResultSchema",
    "EnrichSchema",
    "EventExportFilterSchema",
    "EventReportRowSchema",
    "ExportFormat",
    "ImportResultSchema",
    "ImportRowSchema",
    "ImportSchema",
    "ParticipantReportRowSchema",
    "RecentCheckInSchema",
    "ReportFilterSchema",
    "ReportFormat",
    "ReportSchema",
    "ReportType",
    "SASSyncResultSchema",
    "SASSyncSchema",
    "SASVerifyParticipantSchema",
    "SASVerifyResultSchema",
    "SASVerifySchema",
    "TaskQueuedSchema",
    "TopCompanySchema",
    "TopEventSchema",
    # Check-in
    "CheckinEventSearchSchema",
    "CheckinParticipantSchema",
    "CheckinRegisterResponse",
    "CheckinRegisterSchema",
    "CheckinSearchSchema",
    "ExistingCheckinResponse",
    "FourEventsCheckResponse",
    "FourEventsCheckSchema",
    "FourEventsRegisterResponse",
    "FourEventsRegisterSchema",
    "SASEventItemSchema",
    "WebhookCallbackResponse",
    "WebhookCallbackSchema",
    # Company
    "CompanyEditSchema",
    "CompanySchema",
    "CompanySearchResponse",
    "CompanySearchSchema",
    "MinimalCompanySchema",
    # Event
    "EventCreateSchema",
    "EventEditSchema",
    "EventReportParticipantSchema",
    "EventReportSchema",
    "EventSchema",
    "EventStatsSchema",
    "MinimalEventSchema",
    # Participant
    "CheckInSchema",
    "CredenciarSchema",
    "CredentialedParticipantSchema",
    "ParticipantCreateSchema",
    "ParticipantEditSchema",
    "ParticipantEventEntrySchema",
    "ParticipantReportSchema",
    "ParticipantSchema",
    "RegistrationSchema",
]
