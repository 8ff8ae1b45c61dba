from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, F, Q

from .models import Block, Hostel, Room

logger = logging.getLogger(__name__)


def active_occupant_count(room: Room, exclude_student=None) -> int:
    queryset = room.students.filter(is_active=True)
    if exclude_student is not None and exclude_student.pk:
        queryset = queryset.exclude(pk=exclude_student.pk)
    return queryset.count()


def ensure_same_hostel(*, hostel, **related):
    """Every related record that carries a hostel must carry the target hostel."""
    if hostel is None:
        return

    errors = {}
    for field, obj in related.items():
        if obj is None:
            continue
        if obj.hostel_id != hostel.id:
            label = field.replace('_', ' ').capitalize()
            errors[field] = f'{label} belongs to a different hostel.'
    if errors:
        raise ValidationError(errors)


def ensure_block_matches_hostel(*, block, hostel):
    if block is None or hostel is None:
        return
    if block.hostel_id != hostel.id:
        raise ValidationError({'block': 'Block belongs to a different hostel than the room.'})


def ensure_capacity_covers_occupancy(room: Room, new_capacity) -> None:
    if not room.pk or new_capacity is None:
        return
    occupied = active_occupant_count(room)
    if new_capacity < occupied:
        raise ValidationError({
            'capacity': f'Capacity {new_capacity} is below current occupancy of {occupied}.'
        })


def ensure_room_has_space(*, room: Room, student) -> Room:
    """Lock the room row and check it can hold the student alongside its other active occupants.

    Must run inside a transaction so the lock is held until the assignment commits.
    """
    locked_room = Room.objects.select_for_update().get(pk=room.pk)

    if student.hostel_id and locked_room.hostel_id != student.hostel_id:
        raise ValidationError({'room': 'Room belongs to a different hostel than the student.'})

    occupied = active_occupant_count(locked_room, exclude_student=student)
    if occupied >= locked_room.capacity:
        logger.info(
            'Room %s rejected student %s: %s/%s occupied',
            locked_room.pk,
            student.pk,
            occupied,
            locked_room.capacity,
        )
        raise ValidationError({
            'room': f'Room {locked_room.room_number} is full (capacity {locked_room.capacity}).'
        })
    return locked_room


def refresh_room_status(room: Room) -> Room:
    if room.status == Room.STATUS_MAINTENANCE:
        return room

    status = Room.STATUS_OCCUPIED if active_occupant_count(room) >= room.capacity else Room.STATUS_AVAILABLE
    if status != room.status:
        room.status = status
        room.save(update_fields=['status', 'updated_at'])
    return room


@transaction.atomic
def create_hostel(**fields) -> Hostel:
    hostel = Hostel(**fields)
    hostel.full_clean()
    hostel.save()
    return hostel


@transaction.atomic
def update_hostel(hostel: Hostel, **changes) -> Hostel:
    for field, value in changes.items():
        setattr(hostel, field, value)
    hostel.full_clean()
    hostel.save()
    return hostel


@transaction.atomic
def delete_hostel(hostel: Hostel) -> None:
    block_count = hostel.blocks.count()
    if block_count:
        raise ValidationError({'hostel': f'Hostel has {block_count} block(s) and cannot be deleted.'})
    hostel.delete()


@transaction.atomic
def create_block(*, hostel: Hostel, block_name: str, **fields) -> Block:
    block = Block(hostel=hostel, block_name=block_name, **fields)
    block.full_clean()
    block.save()
    return block


@transaction.atomic
def update_block(block: Block, **changes) -> Block:
    new_hostel = changes.get('hostel', block.hostel)
    if new_hostel.id != block.hostel_id and block.rooms.exists():
        raise ValidationError({'hostel': 'Block with rooms cannot be moved to another hostel.'})

    for field, value in changes.items():
        setattr(block, field, value)
    block.full_clean()
    block.save()
    return block


@transaction.atomic
def delete_block(block: Block) -> None:
    room_count = block.rooms.count()
    if room_count:
        raise ValidationError({'block': f'Block has {room_count} room(s) and cannot be deleted.'})
    event_count = block.checkincheckouts.count()
    if event_count:
        raise ValidationError({'block': f'Block has {event_count} check-in/check-out record(s) and cannot be deleted.'})

    logger.info('Deleting block %s (%s)', block.pk, block.block_name)
    block.delete()


@transaction.atomic
def create_room(*, block: Block, room_number: str, capacity: int, hostel: Hostel | None = None, **fields) -> Room:
    hostel = hostel or block.hostel
    ensure_block_matches_hostel(block=block, hostel=hostel)

    room = Room(
        hostel=hostel,
        block=block,
        room_number=room_number,
        capacity=capacity,
        **fields,
    )
    room.full_clean()
    room.save()
    logger.info('Created room %s in block %s with capacity %s', room.pk, block.pk, capacity)
    return room


@transaction.atomic
def update_room(room: Room, **changes) -> Room:
    room = Room.objects.select_for_update().get(pk=room.pk)

    new_hostel = changes.get('hostel', room.hostel)
    new_block = changes.get('block', room.block)
    ensure_block_matches_hostel(block=new_block, hostel=new_hostel)

    if new_hostel.id != room.hostel_id and active_occupant_count(room):
        raise ValidationError({'hostel': 'Occupied room cannot be moved to another hostel.'})

    if 'capacity' in changes:
        ensure_capacity_covers_occupancy(room, changes['capacity'])

    for field, value in changes.items():
        setattr(room, field, value)
    room.full_clean()
    room.save()
    return refresh_room_status(room)


@transaction.atomic
def delete_room(room: Room) -> None:
    occupied = active_occupant_count(room)
    if occupied:
        raise ValidationError({'room': f'Room has {occupied} active occupant(s) and cannot be deleted.'})

    logger.info('Deleting room %s (%s)', room.pk, room.room_number)
    room.delete()


def available_rooms(hostel: Hostel | None = None, block: Block | None = None):
    queryset = Room.objects.for_hostel(hostel).annotate(
        occupied=Count('students', filter=Q(students__is_active=True)),
    ).filter(
        occupied__lt=F('capacity'),
    ).exclude(
        status=Room.STATUS_MAINTENANCE,
    ).select_related('block', 'hostel')

    if block is not None:
        queryset = queryset.filter(block=block)
    return queryset.order_by('block__block_name', 'room_number')
