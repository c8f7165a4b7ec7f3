import logging
from datetime import datetime

from flask import Flask, Blueprint, jsonify, request, current_app
from flask_migrate import Migrate

from config import get_config
from constants import DATE_FORMAT, DEFAULT_SCHEDULE_WEEKS, MAX_SCHEDULE_WEEKS, MAX_LENGTHS, DELIVERY_DELIVERED
from models import db, Order, Delivery
from services import (
    MealSelection, ValidationError, StorageError, OrderNotFoundError, ScheduleExistsError,
    default_pricing_config, calculate_final_price, valid_meal_combinations, duration_options,
    generate_schedule, get_delivery_schedule, mark_delivered,
    pause_subscription, resume_subscription, whole_number,
)
from services.subscription import NOT_FOUND, STORAGE_ERROR

logger = logging.getLogger(__name__)

migrate = Migrate()
api = Blueprint('api', __name__)

PRICING_CONFIG = default_pricing_config()


def safe_int(value, default=None):
    """Parse a whole number; default when it is malformed or has a fractional part."""
    try:
        return whole_number(value)
    except (ValueError, TypeError):
        return default


def parse_date(value):
    """Parse a YYYY-MM-DD string; returns None when missing or malformed."""
    if not value:
        return None
    try:
        return datetime.strptime(str(value)[:10], DATE_FORMAT).date()
    except ValueError:
        return None


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _result_response(result):
    """Map an OperationResult to a JSON response and status code."""
    if result.success:
        return jsonify(result.to_dict()), 200
    if result.code == NOT_FOUND:
        return jsonify(result.to_dict()), 404
    if result.code == STORAGE_ERROR:
        return jsonify(result.to_dict()), 500
    return jsonify(result.to_dict()), 400


# =========== ERROR HANDLERS ===========

@api.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({'success': False, 'message': 'Invalid meal selection', 'errors': e.errors}), 400


@api.errorhandler(OrderNotFoundError)
def handle_not_found(e):
    return jsonify({'success': False, 'message': str(e)}), 404


@api.errorhandler(ScheduleExistsError)
def handle_schedule_exists(e):
    return jsonify({'success': False, 'message': str(e)}), 409


@api.errorhandler(StorageError)
def handle_storage_error(e):
    return jsonify({'success': False, 'message': str(e)}), 500


# =========== PRICING ===========

@api.route('/pricing/options')
def pricing_options():
    return jsonify({
        'meal_combinations': valid_meal_combinations(),
        'durations': duration_options(PRICING_CONFIG),
        'plans': sorted(PRICING_CONFIG.plan_multipliers),
    })


@api.route('/quote', methods=['POST'])
def quote():
    data = _json_body()
    too_long = [f'{name} is too long' for name, limit in MAX_LENGTHS.items()
                if len(str(data.get(name) or '')) > limit]
    if too_long:
        raise ValidationError(too_long)
    selection = MealSelection.from_dict(data)
    result = calculate_final_price(selection, PRICING_CONFIG)
    return jsonify({'success': True, 'pricing': result.to_dict()})


# =========== DELIVERIES ===========

@api.route('/orders/<int:order_id>/deliveries', methods=['POST'])
def deliveries_generate(order_id):
    data = _json_body()
    start_date = parse_date(data.get('start_date'))
    if start_date is None:
        return jsonify({'success': False, 'message': 'Start date is required (YYYY-MM-DD)'}), 400
    total_weeks = DEFAULT_SCHEDULE_WEEKS
    if data.get('total_weeks') is not None:
        total_weeks = safe_int(data['total_weeks'])
        if total_weeks is None or not 1 <= total_weeks <= MAX_SCHEDULE_WEEKS:
            return jsonify({'success': False,
                            'message': f'total_weeks must be a whole number from 1 to {MAX_SCHEDULE_WEEKS}'}), 400
    delivery_days = data.get('delivery_days')
    if delivery_days is not None and not isinstance(delivery_days, list):
        return jsonify({'success': False, 'message': 'delivery_days must be a list of weekday names'}), 400
    try:
        deliveries = generate_schedule(order_id, start_date, total_weeks, delivery_days)
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    return jsonify({
        'success': True,
        'message': f'Generated {len(deliveries)} deliveries for order {order_id}',
        'deliveries': [d.to_dict() for d in deliveries],
    }), 201


@api.route('/orders/<int:order_id>/deliveries')
def deliveries_list(order_id):
    schedule = get_delivery_schedule(order_id, notice_hours=current_app.config['PAUSE_NOTICE_HOURS'])
    return jsonify(schedule.to_dict())


@api.route('/orders/<int:order_id>/deliveries/mark', methods=['POST'])
def deliveries_mark(order_id):
    data = _json_body()
    raw_dates = data.get('delivery_dates')
    if not isinstance(raw_dates, list) or not raw_dates:
        return jsonify({'success': False, 'message': 'delivery_dates must be a non-empty list'}), 400
    dates = [parse_date(d) for d in raw_dates]
    if None in dates:
        return jsonify({'success': False, 'message': 'Dates must use YYYY-MM-DD'}), 400
    status = str(data.get('status') or DELIVERY_DELIVERED)
    try:
        updated = mark_delivered(order_id, dates, status=status)
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    return jsonify({
        'success': True,
        'message': f'{updated} deliveries marked as {status}',
        'updated_deliveries': updated,
    })


# =========== PAUSE / RESUME ===========

@api.route('/orders/<int:order_id>/pause', methods=['POST'])
def order_pause(order_id):
    data = _json_body()
    days = safe_int(data.get('pause_duration_days'))
    if days is None:
        return jsonify({'success': False, 'message': 'pause_duration_days must be a whole number'}), 400
    result = pause_subscription(
        order_id, days,
        notice_hours=current_app.config['PAUSE_NOTICE_HOURS'],
        max_days=current_app.config['MAX_PAUSE_DAYS'],
        max_pauses=current_app.config['MAX_PAUSES'],
    )
    return _result_response(result)


@api.route('/orders/<int:order_id>/resume', methods=['POST'])
def order_resume(order_id):
    data = _json_body()
    resume_date = None
    if data.get('resume_date'):
        resume_date = parse_date(data['resume_date'])
        if resume_date is None:
            return jsonify({'success': False, 'message': 'resume_date must use YYYY-MM-DD'}), 400
    result = resume_subscription(
        order_id, resume_date,
        notice_hours=current_app.config['RESUME_NOTICE_HOURS'],
    )
    return _result_response(result)


def create_app(env=None):
    """Build the Flask app for the given environment name."""
    app = Flask(__name__)
    app.config.from_object(get_config(env))

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    db.init_app(app)
    migrate.init_app(app, db)
    app.register_blueprint(api, url_prefix='/api')

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    logger.debug(f"App created with {app.config['SQLALCHEMY_DATABASE_URI']}")
    return app


def init_db(app):
    """Create tables that do not exist yet."""
    with app.app_context():
        db.create_all()
        logger.info(f"Database ready: {Order.__tablename__}, {Delivery.__tablename__}")


if __name__ == '__main__':
    app = create_app()
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
