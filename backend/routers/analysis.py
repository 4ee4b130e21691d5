"""
Weekly and daily analysis API endpoints.

Serves the report built by ReportBuilder: metrics, trends against the
previous period, recommendations and insights.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from adhd_planner.agents import ReviewAgent
from adhd_planner.analytics.report import ReportBuilder
from backend.dependencies import get_report_builder, get_review_agent
from backend.errors import http_errors
from backend.schemas import AnalysisResponse, AgentResponseSchema

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.get("/week", response_model=AnalysisResponse)
async def get_week_analysis(
    reference: Optional[date] = Query(None, alias="date", description="Any date in the week"),
    builder: ReportBuilder = Depends(get_report_builder),
):
    """
    Weekly analysis for the Monday-start week containing ``date``.

    An empty recommendations list means no action is needed.
    """
    with http_errors():
        return builder.weekly(reference).to_dict()


@router.get("/day", response_model=AnalysisResponse)
async def get_day_analysis(
    reference: Optional[date] = Query(None, alias="date", description="Day to analyze"),
    builder: ReportBuilder = Depends(get_report_builder),
):
    """Metrics for one day with trends against the previous day."""
    with http_errors():
        return builder.daily(reference).to_dict()


@router.get("/estimation", response_model=AgentResponseSchema)
async def get_estimation_report(
    reference: Optional[date] = Query(None, alias="date"),
    agent: ReviewAgent = Depends(get_review_agent),
):
    """Estimated vs actual minutes for the week's completed tasks."""
    context = {"date": reference} if reference else {}
    response = agent.process("estimation_report", context)

    if not response.success:
        raise HTTPException(status_code=400, detail=response.message)

    return AgentResponseSchema(
        success=response.success,
        message=response.message,
        data=response.data,
        suggestions=response.suggestions,
    )
