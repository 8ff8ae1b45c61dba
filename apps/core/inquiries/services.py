from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from .models import Inquiry, InquirySeater

logger = logging.getLogger(__name__)


def _save(instance):
    instance.full_clean()
    instance.save()
    return instance


@transaction.atomic
def create_inquiry(*, hostel, name: str, phone: str, **fields) -> Inquiry:
    inquiry = _save(Inquiry(hostel=hostel, name=name, phone=phone, **fields))
    logger.info('Inquiry %s recorded for hostel %s', inquiry.pk, hostel.pk)
    return inquiry


@transaction.atomic
def update_inquiry(inquiry: Inquiry, **changes) -> Inquiry:
    for field, value in changes.items():
        setattr(inquiry, field, value)
    _save(inquiry)

    offered = inquiry.seaters.all()
    if offered.exclude(room__hostel_id=inquiry.hostel_id).exists():
        raise ValidationError({'hostel': 'Inquiry has rooms offered in another hostel.'})
    if inquiry.block_id and offered.exclude(room__block_id=inquiry.block_id).exists():
        raise ValidationError({'block': 'Inquiry has rooms offered outside this block.'})
    return inquiry


@transaction.atomic
def create_inquiry_seater(*, inquiry, room, seater_type: int, **fields) -> InquirySeater:
    return _save(InquirySeater(inquiry=inquiry, room=room, seater_type=seater_type, **fields))


@transaction.atomic
def update_inquiry_seater(seater: InquirySeater, **changes) -> InquirySeater:
    for field, value in changes.items():
        setattr(seater, field, value)
    return _save(seater)
