from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse

load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)

from .db.errors import RecordNotFound, StorageError
from .db.repo import get_repository
from .models.content import (
    ConciergeService,
    ConciergeServiceDraft,
    DiagnosticResult,
    Review,
    ReviewDraft,
    SiteSettings,
    SiteSettingsUpdate,
)
from .models.inquiry import InquiryRequest, InquiryResponse, Lead, LeadStatusUpdate, LeadSummary
from .models.listing import FilterCriteria, Listing, ListingDetailResponse, ListingDraft, ListingListResponse, SortKey
from .services.catalog_service import get_catalog
from .services.diagnostics import run_diagnostics
from .services.inquiry import InquiryService
from .services.recommender import DEFAULT_LIMIT
from .utils.logging import get_logger

LOGGER = get_logger("api")

app = FastAPI(title="Peak Stay API")
router = APIRouter(prefix="/api")


@app.exception_handler(RecordNotFound)
def _not_found(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StorageError)
def _storage_error(request: Request, exc: StorageError):
    LOGGER.error("storage_error path=%s error=%s", request.url.path, exc)
    payload = {"detail": str(exc)}
    if exc.setup_hint:
        payload["setup_hint"] = exc.setup_hint
    return JSONResponse(status_code=503, content=payload)


def _inquiries() -> InquiryService:
    return InquiryService(get_repository())


# ---------------------------------------------------------------------------
# Catalog
@router.get("/listings", response_model=ListingListResponse)
def list_listings(
    location: str = Query(""),
    min_price: float = Query(0, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    bedrooms: int = Query(0, ge=0),
    guests: Optional[int] = Query(None, ge=0),
    check_in: Optional[str] = Query(None),
    check_out: Optional[str] = Query(None),
    sort: SortKey = Query(SortKey.POPULARITY),
):
    criteria = FilterCriteria(
        location=location,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        guests=guests,
        check_in=check_in,
        check_out=check_out,
    )
    items = get_catalog().search(criteria, sort)
    return {"items": items, "total": len(items)}


@router.get("/listings/featured", response_model=List[Listing])
def featured_listings():
    return get_catalog().featured()


@router.get("/locations", response_model=List[str])
def locations():
    return get_catalog().locations()


@router.get("/listings/{listing_id}", response_model=ListingDetailResponse)
def get_listing(listing_id: str, limit: int = Query(DEFAULT_LIMIT, ge=0, le=12)):
    catalog = get_catalog()
    return {"listing": catalog.get(listing_id), "similar": catalog.similar(listing_id, limit)}


@router.get("/listings/{listing_id}/similar", response_model=List[Listing])
def similar_listings(listing_id: str, limit: int = Query(DEFAULT_LIMIT, ge=0, le=12)):
    return get_catalog().similar(listing_id, limit)


# ---------------------------------------------------------------------------
# Listing admin
@router.post("/listings", response_model=Listing, status_code=201)
def create_listing(draft: ListingDraft):
    return get_catalog().add(draft)


@router.put("/listings/{listing_id}", response_model=Listing)
def update_listing(listing_id: str, draft: ListingDraft):
    return get_catalog().update(listing_id, draft)


@router.delete("/listings/{listing_id}", status_code=204)
def delete_listing(listing_id: str):
    get_catalog().delete(listing_id)
    return Response(status_code=204)


@router.post("/admin/seed", response_model=ListingListResponse)
def restore_demo():
    items = get_catalog().restore_demo()
    return {"items": items, "total": len(items)}


# ---------------------------------------------------------------------------
# Inquiries and leads
@router.post("/listings/{listing_id}/inquiries", response_model=InquiryResponse, status_code=201)
def create_inquiry(listing_id: str, req: InquiryRequest):
    listing = get_catalog().get(listing_id)
    return _inquiries().submit(listing, req)


@router.get("/leads", response_model=List[Lead])
def list_leads(user_id: Optional[str] = Query(None)):
    return _inquiries().leads(user_id=user_id)


@router.get("/leads/summary", response_model=LeadSummary)
def lead_summary(user_id: Optional[str] = Query(None)):
    return _inquiries().summary(user_id=user_id)


@router.patch("/leads/{lead_id}", response_model=Lead)
def update_lead(lead_id: str, req: LeadStatusUpdate):
    return _inquiries().update_status(lead_id, req.status)


@router.delete("/leads/{lead_id}", status_code=204)
def delete_lead(lead_id: str):
    _inquiries().delete(lead_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Reviews, concierge services, settings
@router.get("/reviews", response_model=List[Review])
def list_reviews():
    return get_repository().list_reviews()


@router.post("/reviews", response_model=Review, status_code=201)
def create_review(draft: ReviewDraft):
    if not draft.content.strip():
        raise HTTPException(400, detail="review content required")
    return get_repository().create_review(draft)


@router.delete("/reviews/{review_id}", status_code=204)
def delete_review(review_id: str):
    get_repository().delete_review(review_id)
    return Response(status_code=204)


@router.get("/services", response_model=List[ConciergeService])
def list_services():
    return get_repository().list_services()


@router.post("/services", response_model=ConciergeService, status_code=201)
def create_service(draft: ConciergeServiceDraft):
    return get_repository().create_service(draft)


@router.put("/services/{service_id}", response_model=ConciergeService)
def update_service(service_id: str, draft: ConciergeServiceDraft):
    return get_repository().update_service(service_id, draft)


@router.delete("/services/{service_id}", status_code=204)
def delete_service(service_id: str):
    get_repository().delete_service(service_id)
    return Response(status_code=204)


@router.get("/settings", response_model=SiteSettings)
def get_settings():
    return get_repository().get_settings()


@router.put("/settings", response_model=SiteSettings)
def update_settings(patch: SiteSettingsUpdate):
    return get_repository().update_settings(patch)


# ---------------------------------------------------------------------------
@router.get("/diagnostics", response_model=List[DiagnosticResult])
def diagnostics():
    return run_diagnostics(get_repository())


@router.get("/health")
def health():
    repo = get_repository()
    return {"status": "ok", "storage": repo.mode}


app.include_router(router)
