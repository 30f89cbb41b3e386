from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from bingo.models import Phrase
from bingo.services.game.projection import public_state

rooms = Blueprint('rooms', __name__)


def _registry():
    return current_app.extensions['bingo_registry']


@rooms.route('/rooms', methods=['POST'])
def create_room():
    """Creates an empty room. Diagnostics only; sockets normally do this."""
    code, _room = _registry().create_room()
    current_app.logger.info(f"[http] createRoom code={code}")
    current_app.extensions['bingo_broadcaster'].rooms_update()
    return jsonify({'roomCode': code}), 201


@rooms.route('/rooms', methods=['GET'])
def list_rooms():
    return jsonify(_registry().list_summaries())


@rooms.route('/rooms/<string:room_code>', methods=['GET'])
def get_room_state(room_code):
    room = _registry().get_room(room_code)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    with room.lock:
        payload = public_state(room)
    payload['code'] = room.code
    return jsonify(payload)


@rooms.route('/phrases', methods=['GET'])
def list_phrases():
    try:
        phrases = Phrase.query.filter_by(enabled=True).order_by(Phrase.id).all()
    except SQLAlchemyError as exc:
        current_app.logger.warning(f"[http] phrases unavailable: {exc}")
        return jsonify({'error': 'Phrase store unavailable'}), 503
    return jsonify([p.to_dict() for p in phrases])
