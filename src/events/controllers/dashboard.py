import typing as t

from django.http import HttpResponse
from django.utils import timezone
from ninja import Query
from ninja_extra import api_controller, route
from ninja_extra.exceptions import PermissionDenied

from accounts.permissions import EXPORT_REPORTS, VIEW_REPORTS, HasPermission, has_permission
from common.authentication import StructlogJWTAuth
from common.controllers import UserAwareController
from events import schema
from events.service import dashboard_service, report_service


@api_controller(
    "/admin",
    auth=StructlogJWTAuth(),
    permissions=[HasPermission(VIEW_REPORTS)],
    tags=["Admin Dashboard"],
)
class DashboardController(UserAwareController):
    @route.get("/dashboard", url_name="dashboard", response=schema.DashboardSchema)
    def dashboard(self, period: schema.DashboardPeriod = "month") -> dict[str, t.Any]:
        """Dashboard numbers for the period (`day`, `week`, `month` or `year`).

        Event and registration totals are restricted to the period; `chart_data`
        always covers check-ins of the last 7 days.
        """
        return dashboard_service.build_dashboard(period)

    @route.get(
        "/reports",
        url_name="reports",
        response=schema.ReportSchema,
    )
    def reports(
        self,
        params: schema.ReportFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> t.Any:
        """Event or participant report over a date range.

        `format=csv` downloads the same rows as CSV, which needs the `export_reports` permission.
        """
        report, columns = report_service.build_report(params.type, params.start_date, params.end_date)
        if params.format == "csv":
            if not has_permission(self.user(), EXPORT_REPORTS):
                raise PermissionDenied("Você não tem permissão para exportar relatórios.")
            response = HttpResponse(report_service.to_csv(report["data"], columns), content_type="text/csv")
            filename = f"{params.type}-{timezone.localdate().isoformat()}.csv"
            response["Content-Disposition"] = f"attachment; filename={filename}"
            return response
        return {"type": params.type, "start_date": params.start_date, "end_date": params.end_date, **report}
