from flask import jsonify


def api_response(status_code, data=None, message='Success'):
    """Success envelope shared by every route"""
    response = jsonify({
        'statusCode': status_code,
        'data': data if data is not None else {},
        'message': message,
        'success': status_code < 400
    })
    response.status_code = status_code
    return response
