def _person(**overrides):
    body = {
        'name': 'Ada Lovelace',
        'phone': '02 1234 5678',
        'department_id': 3,
        'street': '10 Engine Street',
        'city': 'Analytica',
        'state': 'NSW',
        'zip': '2000',
        'country': 'Australia',
    }
    body.update(overrides)
    return body


def test_list_people_resolves_departments(client):
    r = client.get('/api/people')
    assert r.status_code == 200
    people = r.json()
    assert len(people) == 5
    departments = {d['id']: d for d in client.get('/api/departments').json()}
    for p in people:
        if p['department_id'] is None:
            assert p['department'] is None
        else:
            assert p['department'] == departments[p['department_id']]


def test_get_person_includes_department(client):
    r = client.get('/api/people/1')
    assert r.status_code == 200
    data = r.json()
    assert data['name'] == 'John Smith'
    assert data['department'] == {'id': 1, 'name': 'General'}


def test_get_missing_person_is_404(client):
    r = client.get('/api/people/999')
    assert r.status_code == 404
    assert r.json()['detail'] == 'Person not found.'


def test_create_person_with_seeded_department(client):
    r = client.post('/api/people', json=_person())
    assert r.status_code == 201
    created = r.json()
    assert r.headers['Location'] == f"/api/people/{created['id']}"
    assert created['department'] == {'id': 3, 'name': 'Finance'}
    fetched = client.get(f"/api/people/{created['id']}").json()
    assert fetched == created


def test_create_unassigned_person(client):
    r = client.post('/api/people', json=_person(department_id=None))
    assert r.status_code == 201
    assert r.json()['department_id'] is None
    assert r.json()['department'] is None


def test_create_person_with_unknown_department_is_rejected(client):
    r = client.post('/api/people', json=_person(department_id=999))
    assert r.status_code == 400
    assert '999' in r.json()['detail']
    assert len(client.get('/api/people').json()) == 5


def test_create_person_missing_fields_is_422(client):
    r = client.post('/api/people', json={'name': 'Nobody'})
    assert r.status_code == 422


def test_update_person_full_replace(client):
    current = client.get('/api/people/1').json()
    body = {k: current[k] for k in ('name', 'phone', 'department_id', 'street', 'city', 'state', 'zip', 'country')}
    body['city'] = 'NewCity'
    r = client.put('/api/people/1', json=body)
    assert r.status_code == 200
    after = client.get('/api/people/1').json()
    assert after['city'] == 'NewCity'
    for key, value in body.items():
        assert after[key] == value


def test_update_person_moves_department(client):
    r = client.put('/api/people/1', json=_person(department_id=4))
    assert r.status_code == 200
    assert r.json()['department'] == {'id': 4, 'name': 'Marketing'}
    assert client.get('/api/people/1').json()['department']['name'] == 'Marketing'


def test_update_person_with_unknown_department_changes_nothing(client):
    before = client.get('/api/people/1').json()
    r = client.put('/api/people/1', json=_person(department_id=999))
    assert r.status_code == 400
    assert client.get('/api/people/1').json() == before


def test_update_missing_person_is_404(client):
    r = client.put('/api/people/999', json=_person())
    assert r.status_code == 404
    assert r.json()['detail'] == 'Person not found.'


def test_delete_person(client):
    r = client.delete('/api/people/1')
    assert r.status_code == 204
    assert client.get('/api/people/1').status_code == 404


def test_delete_missing_person_is_404(client):
    r = client.delete('/api/people/999')
    assert r.status_code == 404
    assert r.json()['detail'] == 'Person not found.'


def test_malformed_person_id_is_client_error(client):
    assert client.get('/api/people/abc').status_code == 422
    assert client.put('/api/people/abc', json=_person()).status_code == 422
    assert client.delete('/api/people/abc').status_code == 422


def test_out_of_range_person_id_is_client_error(client):
    too_big = 2 ** 70
    assert client.get(f'/api/people/{too_big}').status_code == 422
    assert client.put(f'/api/people/{too_big}', json=_person()).status_code == 422
    assert client.delete(f'/api/people/{too_big}').status_code == 422


def test_out_of_range_department_reference_is_client_error(client):
    r = client.post('/api/people', json=_person(department_id=2 ** 70))
    assert r.status_code == 422
    r = client.put('/api/people/1', json=_person(department_id=-(2 ** 70)))
    assert r.status_code == 422
    assert len(client.get('/api/people').json()) == 5


def test_deleted_person_id_is_not_reused(client):
    highest = max(p['id'] for p in client.get('/api/people').json())
    assert client.delete(f'/api/people/{highest}').status_code == 204
    r = client.post('/api/people', json=_person())
    assert r.status_code == 201
    assert r.json()['id'] != highest
    assert client.get(f'/api/people/{highest}').status_code == 404
