# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table), confirmed by email before a session is issued
# - User login, session management and refresh-token rotation
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.refresh_session() - Rotate a refresh token into a new session
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

A database trigger creates the matching public.profiles row on sign-up,
copying full_name from user_metadata. The role chosen at sign-up is written
to public.user_roles by AuthService.register.
"""
