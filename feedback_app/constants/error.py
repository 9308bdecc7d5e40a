# constants/errors.py
class ERROR:
    USER_ALREADY_EXISTS = "User already exists"
    INVALID_CREDENTIALS = "Invalid credentials"
    PASSWORD_TOO_SHORT = "Password must be at least {min_length} characters long"
    INTERNAL_ERROR = "Something went wrong. Please try again later"
    REQUIRED_NAME = "Name is required."
    REQUIRED_EMAIL = "Please provide a valid email address."
    REQUIRED_PASSWORD = "Password is required."
    REQUIRED_TITLE = "Title is required."
    REQUIRED_QUESTIONTEXT = "Question text is required."
    REQUIRED_FORMID = "Form id is required."
    UNAUTHORIZED = "Not authorized, token failed"
    FORM_NOT_FOUND = "Form not found"
    FORM_NOT_OWNED = "Form not found or you are not authorized to access it"
    FORM_EXPIRED = "This form has expired and is no longer accepting responses"
    NO_RESPONSES_TO_EXPORT = "No responses found for this form to export."
    DUPLICATE_QUESTION_ID = 'Question id "{question_id}" is used more than once'
    UNKNOWN_QUESTION = 'Answer references unknown question "{question_id}"'
    DUPLICATE_ANSWER = 'Question "{question_id}" is answered more than once'
    REQUIRED_ANSWER_MISSING = 'Required question "{question_text}" is missing an answer.'
    VALIDATION_FAILED = "Validation failed"
