import pytest

from peakstay.db.local_repo import LocalRepository
from peakstay.db.seed import seed_listings
from peakstay.models.inquiry import InquiryRequest
from peakstay.models.content import SiteSettingsUpdate
from peakstay.services.inquiry import InquiryService, build_whatsapp_url, card_message, stay_message


def _villa():
    return next(l for l in seed_listings() if l.name == "Riverside Retreat Karjat")


def test_whatsapp_url_strips_number_and_encodes_text():
    url = build_whatsapp_url("+91 91579-28471", "Jai Hind! I'm in (Goa)")
    assert url == "https://wa.me/919157928471?text=Jai%20Hind!%20I'm%20in%20(Goa)"


def test_messages_name_the_villa():
    villa = _villa()
    assert card_message(villa) == "Jai Hind! I'm enquiring about Riverside Retreat Karjat for my next premium stay."
    assert stay_message(villa) == "Jai Hind! I'm interested in Riverside Retreat Karjat stay: flexible to flexible. Please confirm."
    assert "2025-02-01 to 2025-02-03" in stay_message(villa, "2025-02-01", "2025-02-03")


def test_submit_records_new_lead_and_builds_link():
    repo = LocalRepository()
    service = InquiryService(repo)
    villa = _villa()
    response = service.submit(villa, InquiryRequest(check_in="2025-02-01", check_out="2025-02-04", customer_name="Asha"))
    assert response.lead.status == "new"
    assert response.lead.villa_id == villa.id
    assert response.lead.villa_name == villa.name
    assert response.nights == 3
    assert response.whatsapp_url.startswith("https://wa.me/")
    assert "2025-02-01%20to%202025-02-04" in response.whatsapp_url
    assert [lead.id for lead in service.leads()] == [response.lead.id]


def test_submit_uses_configured_number():
    repo = LocalRepository()
    repo.update_settings(SiteSettingsUpdate(whatsapp_number="+1 (555) 010-9999"))
    response = InquiryService(repo).submit(_villa(), InquiryRequest())
    assert response.whatsapp_url.startswith("https://wa.me/15550109999?text=")


def test_malformed_dates_are_dropped():
    response = InquiryService(LocalRepository()).submit(_villa(), InquiryRequest(check_in="soon", check_out="2025-13-40"))
    assert response.lead.check_in is None
    assert response.lead.check_out is None
    assert response.nights is None
    assert "flexible to flexible" in response.message


def test_status_updates_and_summary():
    service = InquiryService(LocalRepository())
    first = service.submit(_villa(), InquiryRequest(user_id="u1")).lead
    service.submit(_villa(), InquiryRequest(user_id="u2"))
    service.update_status(first.id, "booked")
    summary = service.summary()
    assert summary.total == 2
    assert summary.by_status == {"new": 1, "contacted": 0, "booked": 1, "lost": 0}
    assert [lead.user_id for lead in service.leads(user_id="u1")] == ["u1"]


def test_unknown_status_is_rejected():
    service = InquiryService(LocalRepository())
    lead = service.submit(_villa(), InquiryRequest()).lead
    with pytest.raises(ValueError):
        service.update_status(lead.id, "archived")


def test_delete_removes_lead():
    service = InquiryService(LocalRepository())
    lead = service.submit(_villa(), InquiryRequest()).lead
    service.delete(lead.id)
    assert service.leads() == []
