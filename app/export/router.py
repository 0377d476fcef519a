from fastapi import APIRouter
from fastapi.responses import Response
from app.plans.schemas import FitnessPlan
from .service import XLSX_MEDIA_TYPE, export_filename, export_plan_xlsx

router = APIRouter(prefix="/api", tags=["export"])


@router.post("/export-plan")
async def export_plan(plan: FitnessPlan):
	data = export_plan_xlsx(plan)
	return Response(
		content=data,
		media_type=XLSX_MEDIA_TYPE,
		headers={"Content-Disposition": f'attachment; filename="{export_filename(plan)}"'},
	)
