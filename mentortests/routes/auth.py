"""
Authentication Routes
Session-based login, logout, registration
"""
from flask import Blueprint, jsonify, session, g
from werkzeug.security import generate_password_hash, check_password_hash

from mentortests.extensions import db
from mentortests.models import User
from mentortests.schemas import RegisterRequest, LoginRequest
from mentortests.errors import AuthError, InvalidInputError
from mentortests.utils import parse_body, require_login

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """User registration"""
    data = parse_body(RegisterRequest)
    email = data.email.strip().lower()

    if User.query.filter_by(email=email).first():
        raise InvalidInputError('Email already registered')

    user = User(
        name=data.name,
        email=email,
        password=generate_password_hash(data.password),
        role=data.role,
        classname=data.classname,
    )
    db.session.add(user)
    db.session.commit()

    return jsonify({'success': True, 'message': 'Registration successful', 'user': user.to_dict()}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """User login"""
    data = parse_body(LoginRequest)
    user = User.query.filter_by(email=data.email.strip().lower()).first()

    if not user or not check_password_hash(user.password, data.password):
        raise AuthError('Invalid email or password')

    session.clear()
    session['user_id'] = user.id
    session['role'] = user.role

    return jsonify({'success': True, 'message': 'Login successful', 'user': user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """User logout"""
    session.clear()
    return jsonify({'success': True, 'message': 'Logged out successfully'})


@auth_bp.route('/me')
@require_login
def me():
    """Current user profile"""
    return jsonify({'success': True, 'user': g.user.to_dict()})
