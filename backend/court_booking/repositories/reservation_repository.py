import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from court_booking.errors import SlotConflictError, StorageError
from court_booking.models.reservation import Reservation
from court_booking.repositories.base import storage_operation

logger = logging.getLogger(__name__)


class ReservationRepository:
    def __init__(self, session: Session):
        self.session = session

    def _list(self, query, operation: str, **context) -> List[Reservation]:
        with storage_operation(self.session, operation, **context):
            return list(self.session.exec(query.order_by(Reservation.date, Reservation.start_time)).all())

    def get_by_id(self, reservation_id: int) -> Optional[Reservation]:
        with storage_operation(self.session, "get_reservation", reservation_id=reservation_id):
            return self.session.get(Reservation, reservation_id)

    def list_all(self) -> List[Reservation]:
        return self._list(select(Reservation), "list_reservations")

    def list_by_date(self, day: date) -> List[Reservation]:
        return self._list(select(Reservation).where(Reservation.date == day), "list_reservations_by_date", date=day)

    def list_by_court(self, court_id: int) -> List[Reservation]:
        return self._list(
            select(Reservation).where(Reservation.court_id == court_id), "list_reservations_by_court", court_id=court_id
        )

    def list_by_member(self, member_id: int) -> List[Reservation]:
        return self._list(
            select(Reservation).where(Reservation.member_id == member_id),
            "list_reservations_by_member",
            member_id=member_id,
        )

    def list_by_date_and_court(self, day: date, court_id: int) -> List[Reservation]:
        return self._list(
            select(Reservation).where(Reservation.date == day, Reservation.court_id == court_id),
            "list_reservations_by_date_and_court",
            date=day,
            court_id=court_id,
        )

    def list_by_date_range_and_court(self, start: date, end: date, court_id: int) -> List[Reservation]:
        return self._list(
            select(Reservation).where(
                Reservation.court_id == court_id,
                Reservation.date >= start,
                Reservation.date <= end,
            ),
            "list_reservations_by_date_range_and_court",
            start=start,
            end=end,
            court_id=court_id,
        )

    def insert(self, reservation: Reservation) -> int:
        """
        Persist a new reservation and return its generated id.

        Raises:
            SlotConflictError: the slot uniqueness constraint rejected the row
                (a concurrent request booked the same court/date/time first)
            StorageError: any other persistence failure
        """
        context = {"court_id": reservation.court_id, "date": reservation.date, "start_time": reservation.start_time}
        try:
            self.session.add(reservation)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if self._slot_taken(reservation):
                logger.warning("Slot uniqueness constraint rejected reservation %s", context)
                raise SlotConflictError(reservation.court_id, reservation.date, reservation.start_time) from exc
            raise StorageError("insert_reservation", exc, **context) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Storage failure during insert_reservation %s", context)
            raise StorageError("insert_reservation", exc, **context) from exc

        with storage_operation(self.session, "insert_reservation", **context):
            self.session.refresh(reservation)
        return reservation.id

    def _slot_taken(self, reservation: Reservation) -> bool:
        with storage_operation(self.session, "check_reservation_slot"):
            existing = self.session.exec(
                select(Reservation.id).where(
                    Reservation.court_id == reservation.court_id,
                    Reservation.date == reservation.date,
                    Reservation.start_time == reservation.start_time,
                )
            ).first()
        return existing is not None

    def delete(self, reservation_id: int) -> bool:
        with storage_operation(self.session, "delete_reservation", reservation_id=reservation_id):
            reservation = self.session.get(Reservation, reservation_id)
            if reservation is None:
                return False
            self.session.delete(reservation)
            self.session.commit()
            return True

    def delete_in_range(self, court_id: int, start: date, end: date) -> List[Reservation]:
        """
        Stage deletion of every reservation on ``court_id`` dated ``start``..``end``
        inclusive and return them. Nothing is committed; the caller owns the
        transaction.
        """
        displaced = self.list_by_date_range_and_court(start, end, court_id)
        with storage_operation(
            self.session, "delete_reservations_in_range", court_id=court_id, start=start, end=end
        ):
            for reservation in displaced:
                self.session.delete(reservation)
            self.session.flush()
        return displaced
