from flask_wtf import FlaskForm
from wtforms import StringField, SelectField
from wtforms.validators import Length, Optional, ValidationError
from bson.objectid import ObjectId
from helpdesk.models import Priority, Status, TicketType, choices_for


class TicketFilterForm(FlaskForm):
    class Meta:
        csrf = False
    ticket_id = StringField('ID', validators=[Optional(), Length(min=24, max=24)])
    status = SelectField('Estado', choices=choices_for(Status, 'Todos los Estados'), validators=[Optional()])
    type = SelectField('Tipo', choices=choices_for(TicketType, 'Todos los Tipos'), validators=[Optional()])
    priority = SelectField('Prioridad', choices=choices_for(Priority, 'Todas las Prioridades'), validators=[Optional()])

    def validate_ticket_id(self, ticket_id):
        if ticket_id.data and not ObjectId.is_valid(ticket_id.data):
            raise ValidationError('El ID de ticket no es válido.')

    def build_query(self):
        """Consulta de MongoDB con los filtros informados. El ID se compara de forma exacta."""
        query = {}
        if self.ticket_id.data:
            query['_id'] = ObjectId(self.ticket_id.data.strip())
        if self.status.data:
            query['status'] = self.status.data
        if self.type.data:
            query['type'] = self.type.data
        if self.priority.data:
            query['priority'] = self.priority.data
        return query
