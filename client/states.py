"""FSM states for the city edit form."""

class CommonStates:
    """Общие состояния."""
    IDLE = "idle"

class CityEditStates:
    """Состояния формы редактирования города."""
    LOADING_COUNTRIES = "city_edit:loading_countries"  # грузим справочник стран (и город в режиме edit)
    READY = "city_edit:ready"  # форма доступна для ввода
    SUBMITTING = "city_edit:submitting"  # POST/PUT в процессе
    SUBMITTED = "city_edit:submitted"  # сохранено, навигация выполнена

class FormModes:
    CREATE = "create"
    EDIT = "edit"
