# constants/messages.py

class MESSAGE:
    USER_CREATED = "User registered successfully"
    AUTH_SUCCESS = "Login successful"
    FORM_CREATED = "Form created successfully"
    FORMS_FETCHED = "Forms fetched successfully"
    FORM_FETCHED = "Form fetched successfully"
    FORM_DELETED = "Form and its responses deleted successfully"
    RESPONSE_SUBMITTED = "Feedback submitted successfully!"
    RESPONSES_FETCHED = "Responses fetched successfully"
    SUMMARY_FETCHED = "Response summary generated successfully"
