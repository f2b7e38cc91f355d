"""Tests for back-office commands."""

from datetime import timedelta
from unittest.mock import patch

import pytest
from django.core import mail
from django.http import Http404
from django.utils import timezone

from maison.backoffice import services
from maison.catalog.models import Collection, CollectionItem, LimitedDrop
from maison.core.cache import CacheTags
from maison.core.models import PublicationStatus
from maison.store.models import (
    AppointmentStatus,
    FulfillmentStatus,
    OrderStatus,
    PaymentRecord,
    PaymentStatus,
    Promotion,
)


class TestFormHelpers:
    def test_normalize_code(self):
        assert services.normalize_code(" aurore 10% ") == "AURORE10"

    def test_normalize_slug(self):
        assert services.normalize_slug("  Nuit Blanche / 2026 ") == "nuit-blanche-2026"

    def test_parse_when_date_only(self):
        moment = services.parse_when("2026-03-14")

        assert timezone.is_aware(moment)
        assert moment.hour == 0

    def test_parse_when_invalid(self):
        with pytest.raises(ValueError):
            services.parse_when("yesterday")

    def test_form_locale(self):
        assert services.form_locale("FR") == "fr"
        assert services.form_locale("") is None
        assert services.form_locale("de") is None


@pytest.mark.django_db
class TestDrops:
    def test_create_drop(self, collection):
        drop = services.create_drop({
            "title": " Nuit Blanche ",
            "collection_id": str(collection.pk),
            "starts_at": "2026-11-01T10:00",
            "locale": "FR",
            "waitlist_open": "on",
        })

        assert drop.title == "Nuit Blanche"
        assert drop.locale == "fr"
        assert drop.waitlist_open is True
        assert drop.ends_at is None

    def test_create_drop_requires_title_and_collection(self, collection):
        with pytest.raises(ValueError, match="Title is required"):
            services.create_drop({"collection_id": collection.pk})
        with pytest.raises(ValueError, match="Collection is required"):
            services.create_drop({"title": "Nuit Blanche"})

    def test_close_drop_ends_it_now(self, drop):
        services.close_drop(drop.pk)

        drop.refresh_from_db()
        assert drop.ends_at <= timezone.now()

    def test_update_drop(self, drop):
        services.update_drop(drop.pk, {"title": "Aube", "ends_at": "2026-12-01"})

        drop.refresh_from_db()
        assert drop.title == "Aube"
        assert drop.ends_at is not None
        assert drop.waitlist_open is False

    def test_delete_drop_invalidates_pages(self, drop):
        with patch("maison.backoffice.services.invalidate_tags") as invalidate:
            services.delete_drop(drop.pk)

        assert not LimitedDrop.objects.exists()
        invalidate.assert_called_once_with(CacheTags.COLLECTIONS, CacheTags.HOMEPAGE)


@pytest.mark.django_db
class TestPromotions:
    def test_create_promotion(self):
        promotion = services.create_promotion({
            "code": "aurore-10",
            "discount_type": "percentage",
            "discount_value": "10",
            "usage_limit": "",
            "locale": "EN",
        })

        assert promotion.code == "AURORE-10"
        assert promotion.discount_value == 10
        assert promotion.usage_limit is None
        assert promotion.locale == "en"
        assert promotion.starts_at <= timezone.now()

    def test_rejects_unknown_discount_type(self):
        with pytest.raises(ValueError, match="Invalid discount type"):
            services.create_promotion({"code": "X1", "discount_type": "bogus"})

    def test_rejects_blank_code(self):
        with pytest.raises(ValueError, match="Code is required"):
            services.create_promotion({"code": "%%"})

    def test_toggle_ends_then_reopens(self, promotion):
        services.toggle_promotion(promotion.pk)
        promotion.refresh_from_db()
        assert promotion.ends_at is not None

        services.toggle_promotion(promotion.pk)
        promotion.refresh_from_db()
        assert promotion.ends_at is None

    def test_delete(self, promotion):
        services.delete_promotion(promotion.pk)

        assert not Promotion.objects.exists()


@pytest.mark.django_db
class TestOrderState:
    def test_updates_statuses_and_records_note(self, order):
        services.update_order_state(
            order.pk,
            status=OrderStatus.IN_PRODUCTION,
            fulfillment_status=FulfillmentStatus.IN_PROGRESS,
            payment_status=PaymentStatus.PAID,
            note="  Broderie en cours ",
        )

        order.refresh_from_db()
        assert order.status == OrderStatus.IN_PRODUCTION
        assert order.fulfillment_status == FulfillmentStatus.IN_PROGRESS
        note = PaymentRecord.objects.get(order=order)
        assert note.is_ops_note
        assert note.data == {"note": "Broderie en cours"}

    def test_missing_statuses_default(self, order):
        services.update_order_state(order.pk)

        order.refresh_from_db()
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.UNPAID
        assert order.fulfillment_status == FulfillmentStatus.NOT_STARTED

    def test_invalid_status(self, order):
        with pytest.raises(ValueError, match="Invalid order status"):
            services.update_order_state(order.pk, status="LOST")

    def test_unknown_order(self, db):
        with pytest.raises(Http404):
            services.update_order_state("00000000-0000-0000-0000-000000000000")

    def test_shipping_sends_email_after_commit(self, order, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            services.update_order_state(
                order.pk,
                status=OrderStatus.SHIPPED,
                fulfillment_status=FulfillmentStatus.SHIPPED,
                payment_status=PaymentStatus.PAID,
            )

        assert len(callbacks) == 1
        [message] = mail.outbox
        assert message.subject == "Votre commande MA-20260314-12345 est en route"
        assert message.to == ["claire@example.com"]

    def test_already_shipped_does_not_email_again(self, order, django_capture_on_commit_callbacks):
        order.fulfillment_status = FulfillmentStatus.SHIPPED
        order.save()

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            services.update_order_state(
                order.pk,
                status=OrderStatus.SHIPPED,
                fulfillment_status=FulfillmentStatus.SHIPPED,
                payment_status=PaymentStatus.PAID,
            )

        assert callbacks == []
        assert mail.outbox == []

    def test_guest_order_ships_silently(self, order, django_capture_on_commit_callbacks):
        order.user = None
        order.save()

        with django_capture_on_commit_callbacks(execute=True):
            services.update_order_state(order.pk, fulfillment_status=FulfillmentStatus.SHIPPED)

        assert mail.outbox == []

    def test_blank_note_is_ignored(self, order):
        assert services.add_order_note(order.pk, "   ") is None
        assert not PaymentRecord.objects.exists()


@pytest.mark.django_db
class TestAppointments:
    def test_confirm(self, appointment):
        services.confirm_appointment(appointment.pk)

        appointment.refresh_from_db()
        assert appointment.status == AppointmentStatus.CONFIRMED

    def test_reschedule(self, appointment):
        services.reschedule_appointment(appointment.pk, "2026-12-24T15:00")

        appointment.refresh_from_db()
        assert appointment.status == AppointmentStatus.RESCHEDULED
        assert appointment.appointment_at.day == 24

    def test_reschedule_requires_date(self, appointment):
        with pytest.raises(ValueError, match="New date is required"):
            services.reschedule_appointment(appointment.pk, "")

    def test_invalid_status(self, appointment):
        with pytest.raises(ValueError):
            services.update_appointment_status(appointment.pk, "lost")

    def test_assign_concierge_and_notes(self, appointment):
        services.assign_concierge(appointment.pk, "Hélène")
        services.add_appointment_note(appointment.pk, "")

        appointment.refresh_from_db()
        assert appointment.concierge == "Hélène"
        assert appointment.notes is None


@pytest.mark.django_db
class TestCollections:
    def test_create_collection_with_translations(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            collection = services.create_collection({"slug": "Aurore", "title_fr": "Aurore", "status": "ACTIVE"})

        assert collection.slug == "aurore"
        assert collection.status == PublicationStatus.ACTIVE
        titles = dict(collection.translations.values_list("locale", "title"))
        assert titles == {"fr": "Aurore", "en": "Aurore"}
        assert len(callbacks) == 1

    def test_slug_required(self, db):
        with pytest.raises(ValueError, match="Slug is required"):
            services.create_collection({"slug": "  "})
        assert not Collection.objects.exists()

    def test_add_product_appends(self, collection, second_product):
        item = services.add_product_to_collection(collection.pk, second_product.pk)

        assert item.sort_order == 2
        assert services.add_product_to_collection(collection.pk, second_product.pk) == item

    def test_add_product_requires_ids(self, collection):
        with pytest.raises(ValueError):
            services.add_product_to_collection(collection.pk, None)

    def test_toggle_highlight_and_remove(self, collection, product):
        item = services.toggle_product_highlight(collection.pk, product.pk)
        assert item.highlighted is True

        services.remove_product_from_collection(collection.pk, product.pk)
        assert not CollectionItem.objects.exists()

    def test_reorder_clamps_negative(self, collection):
        item = collection.items.get()

        services.update_collection_item_order(item.pk, "-4")

        item.refresh_from_db()
        assert item.sort_order == 0


@pytest.mark.django_db
class TestEditorial:
    def test_publish_stamps_date(self, draft_post):
        with patch("maison.backoffice.services.invalidate_tags") as invalidate:
            services.publish_post(draft_post.pk)

        draft_post.refresh_from_db()
        assert draft_post.status == PublicationStatus.ACTIVE
        assert draft_post.published_at is not None
        invalidate.assert_called_once_with(CacheTags.JOURNAL, CacheTags.HOMEPAGE)

    def test_publish_keeps_existing_date(self, draft_post):
        scheduled = timezone.now() + timedelta(days=3)
        draft_post.published_at = scheduled
        draft_post.save()

        services.publish_post(draft_post.pk)

        draft_post.refresh_from_db()
        assert draft_post.published_at == scheduled

    def test_unpublish(self, draft_post):
        services.publish_post(draft_post.pk)
        services.unpublish_post(draft_post.pk)

        draft_post.refresh_from_db()
        assert draft_post.status == PublicationStatus.DRAFT
